"""
Rotational inertia impact of a tire change.

ASSUMPTIONS:
- I = m * r^2, so the diameter change is weighted 1.5x against the weight
  change: factor = (weight% + 1.5 * diameter%) / 2.
- 1% rotational inertia increase ~ 0.4% slower 0-60 and ~0.3% longer
  braking (simplified model).
"""

from tirecalc.models.outputs import ImpactLevel, RotationalImpact


HIGH_IMPACT_THRESHOLD = 10.0
MODERATE_IMPACT_THRESHOLD = 5.0

ACCELERATION_SENSITIVITY = 0.4
BRAKING_SENSITIVITY = 0.3

CATEGORY_DETAILS = {
    ImpactLevel.HIGH: (
        "Significant impact on vehicle dynamics",
        [
            "Expect noticeable reduction in acceleration",
            "Braking distances may increase 5-10%",
            "Consider regearing to compensate for performance loss",
            "Upgraded brakes recommended for safety",
            "Transmission may hunt for gears more frequently",
        ],
    ),
    ImpactLevel.MODERATE: (
        "Noticeable impact on acceleration feel",
        [
            "Slight reduction in acceleration performance",
            "Braking feel may be less responsive",
            "Monitor transmission behavior (may shift differently)",
            "Consider regearing if frequently towing or off-roading",
        ],
    ),
    ImpactLevel.LOW: (
        "Minimal impact on acceleration and braking",
        [
            "Negligible change in daily driving performance",
            "No regearing required unless other factors dictate",
        ],
    ),
}


def rotational_impact_factor(weight_delta_pct: float, diameter_delta_pct: float) -> float:
    return (weight_delta_pct + diameter_delta_pct * 1.5) / 2


def classify_rotational_impact(factor: float) -> ImpactLevel:
    magnitude = abs(factor)
    if magnitude >= HIGH_IMPACT_THRESHOLD:
        return ImpactLevel.HIGH
    if magnitude >= MODERATE_IMPACT_THRESHOLD:
        return ImpactLevel.MODERATE
    return ImpactLevel.LOW


def _acceleration_description(accel_pct: float) -> str:
    if abs(accel_pct) <= 3:
        return "Negligible change in acceleration times"
    example = 8.0 * (1 - accel_pct / 100)
    direction = "slower" if accel_pct < 0 else "faster"
    return (
        f"Approximately {abs(accel_pct):.1f}% {direction} acceleration "
        f"(e.g., 8.0s 0-60 -> {example:.1f}s)"
    )


def _braking_description(factor: float) -> str:
    if abs(factor) > 10:
        return "Increased braking distances; brake upgrade recommended"
    if abs(factor) > 5:
        return "Slightly increased braking effort required"
    return "No significant change in braking performance"


def _summary(factor: float, weight_delta_lbs: float) -> str:
    magnitude = abs(factor)
    added = abs(weight_delta_lbs * 4)
    if magnitude < 2:
        return (
            f"Negligible rotational impact ({factor:.1f}% change). "
            "Daily driving feel will be virtually identical."
        )
    if magnitude < 5:
        return (
            f"Minor rotational impact ({factor:.1f}% change). You may notice slightly "
            "less responsive acceleration, especially when loaded."
        )
    if magnitude < 10:
        return (
            f"MODERATE rotational impact ({factor:.1f}% change). Expect noticeable reduction "
            f"in acceleration feel. Adding {added:.0f} lbs of rotating mass across all four corners."
        )
    if magnitude < 15:
        return (
            f"HIGH rotational impact ({factor:.1f}% change). Acceleration will feel significantly "
            f"slower. Strongly consider regearing to compensate. Adding {added:.0f} lbs of rotating mass."
        )
    return (
        f"EXTREME rotational impact ({factor:.1f}% change). Vehicle dynamics will change "
        "dramatically. Regearing is essential. Brake upgrades recommended. "
        f"Adding {added:.0f} lbs of rotating mass."
    )


def calculate_rotational_impact(
    current_weight_lbs: float,
    new_weight_lbs: float,
    current_diameter_in: float,
    new_diameter_in: float,
    weights_estimated: bool = True,
) -> RotationalImpact:
    """
    Rotational impact of swapping tires.

    Args:
        current_weight_lbs: Current tire weight
        new_weight_lbs: New tire weight
        current_diameter_in: Current tire diameter
        new_diameter_in: New tire diameter
        weights_estimated: True when either weight came from the size-based estimate

    Returns:
        RotationalImpact with factor, category and performance estimates
    """
    weight_delta = new_weight_lbs - current_weight_lbs
    weight_delta_pct = weight_delta / current_weight_lbs * 100
    diameter_delta = new_diameter_in - current_diameter_in
    diameter_delta_pct = diameter_delta / current_diameter_in * 100

    factor = rotational_impact_factor(weight_delta_pct, diameter_delta_pct)
    category = classify_rotational_impact(factor)
    description, recommendations = CATEGORY_DETAILS[category]

    accel_pct = -factor * ACCELERATION_SENSITIVITY

    return RotationalImpact(
        current_weight_lbs=current_weight_lbs,
        new_weight_lbs=new_weight_lbs,
        weight_delta_lbs=weight_delta,
        weight_delta_pct=weight_delta_pct,
        diameter_delta_in=diameter_delta,
        diameter_delta_pct=diameter_delta_pct,
        impact_factor=factor,
        category=category,
        category_description=description,
        acceleration_impact_pct=accel_pct,
        acceleration_description=_acceleration_description(accel_pct),
        braking_impact_pct=-factor * BRAKING_SENSITIVITY,
        braking_description=_braking_description(factor),
        unsprung_mass_increase_lbs=weight_delta * 4,
        confidence="LOW" if weights_estimated else "HIGH",
        recommendations=list(recommendations),
        summary=_summary(factor, weight_delta),
    )

"""
Expedition load adjustments.

Typical overland builds carry 300-1500 lbs of gear, water, recovery
equipment and armor. That load compounds the effect of larger tires on
drivetrain stress, fuel economy and braking.

Load categories:
- LIGHT   (<300 lbs):     weekend trips, minimal gear
- MEDIUM  (300-700 lbs):  week-long trips, full camping gear
- HEAVY   (700-1200 lbs): extended overlanding, full build
- EXTREME (1200+ lbs):    expedition spec, armor, large water/fuel
"""

from typing import Optional

from tirecalc.models.outputs import (
    AdjustedStress,
    BrakingImpact,
    ComparisonResult,
    FuelEconomyImpact,
    ImpactLevel,
    LoadCategory,
    LoadMultipliers,
    LoadWarning,
    OverlandImpact,
    StressScoreResult,
)
from tirecalc.physics.units import round_half_up

# Curb weight the braking estimate is relative to
BASE_VEHICLE_WEIGHT_LBS = 4500.0

LOAD_CATEGORIES = [
    (300, LoadCategory(
        category="LIGHT",
        description="Weekend trip gear",
        examples=["Basic camping gear", "Recovery equipment", "Cooler and supplies"],
    )),
    (700, LoadCategory(
        category="MEDIUM",
        description="Week-long overland setup",
        examples=["Full camping gear", "Extra fuel/water (30-50 gal)", "RTT or ground tent", "Fridge"],
    )),
    (1200, LoadCategory(
        category="HEAVY",
        description="Extended expedition build",
        examples=[
            "RTT + awning",
            "Large water storage (50+ gal)",
            "Dual battery system",
            "Bumpers/sliders",
            "Fridge/freezer",
        ],
    )),
]
EXTREME_LOAD = LoadCategory(
    category="EXTREME",
    description="Full expedition spec",
    examples=[
        "Full armor (bumpers, sliders, skids)",
        "Massive water/fuel (100+ gal)",
        "Winch",
        "RTT + kitchen setup",
        "Dual spares",
    ],
)


def categorize_load(load_lbs: float) -> LoadCategory:
    for limit, category in LOAD_CATEGORIES:
        if load_lbs < limit:
            return category
    return EXTREME_LOAD


def load_multipliers(load_lbs: float) -> LoadMultipliers:
    """
    Multipliers applied to stress, fuel, braking and suspension estimates.

    Stress grows with the effective vehicle weight increase (1.5x at
    2000 lbs); fuel is the most sensitive (1.67x at 2000 lbs).
    """
    if load_lbs > 800:
        suspension = 1.2
    elif load_lbs > 400:
        suspension = 1.1
    else:
        suspension = 1.0

    return LoadMultipliers(
        stress=1 + load_lbs / 4000,
        fuel=1 + load_lbs / 3000,
        braking=1 + load_lbs / 5000,
        suspension=suspension,
    )


def stress_classification(score: float) -> ImpactLevel:
    if score >= 61:
        return ImpactLevel.HIGH
    if score >= 31:
        return ImpactLevel.MODERATE
    return ImpactLevel.LOW


def adjust_stress(stress: StressScoreResult, multipliers: LoadMultipliers) -> AdjustedStress:
    """Scale a stress score by the load multiplier, capped at 100."""
    loaded = stress.score * multipliers.stress
    adjusted = int(round_half_up(loaded))
    return AdjustedStress(
        base=stress.score,
        adjusted=min(100, adjusted),
        increase=int(round_half_up(loaded - stress.score)),
        classification=stress_classification(adjusted),
    )


def fuel_economy_impact(
    diameter_change_pct: float,
    load_lbs: float,
    multipliers: LoadMultipliers,
) -> FuelEconomyImpact:
    """
    Estimated fuel economy loss in percent.

    Roughly 1% loss per 2% diameter increase, compounded by the load, plus
    0.5% per 100 lbs of load on its own.
    """
    base = abs(diameter_change_pct) * 0.5
    load_only = load_lbs / 100 * 0.5
    total = base * multipliers.fuel + load_only
    expected = int(round_half_up(total))

    if total > 15:
        description = f"Severe fuel economy impact: expect {expected}%+ reduction"
    elif total > 10:
        description = f"Significant fuel economy impact: expect {expected}% reduction"
    elif total > 5:
        description = f"Moderate fuel economy impact: expect {expected}% reduction"
    else:
        description = f"Minor fuel economy impact: expect {expected}% reduction"

    return FuelEconomyImpact(
        base_loss_pct=round_half_up(base, 1),
        load_loss_pct=round_half_up(load_only, 1),
        total_loss_pct=round_half_up(total, 1),
        description=description,
    )


def braking_impact(load_lbs: float, comparison: ComparisonResult) -> BrakingImpact:
    """Braking distance increase: load share of curb weight plus 0.3x the rotational factor."""
    load_increase = load_lbs / BASE_VEHICLE_WEIGHT_LBS * 100
    tire_increase = 0.0
    if comparison.rotational_impact is not None:
        tire_increase = comparison.rotational_impact.impact_factor * 0.3
    total = load_increase + tire_increase

    if total > 15:
        recommendation = "Brake upgrade essential for safe loaded operation"
    elif total > 10:
        recommendation = "Brake upgrade strongly recommended"
    elif total > 5:
        recommendation = "Monitor brake performance, consider upgrade"
    else:
        recommendation = "Stock brakes adequate"

    return BrakingImpact(
        load_increase_pct=round_half_up(load_increase, 1),
        tire_increase_pct=round_half_up(tire_increase, 1),
        total_increase_pct=round_half_up(total, 1),
        recommendation=recommendation,
    )


def load_warnings(load_lbs: float, comparison: ComparisonResult) -> list[LoadWarning]:
    warnings = []
    load_text = f"{load_lbs:g}"

    if load_lbs > 800:
        warnings.append(LoadWarning(
            severity="high",
            component="Suspension",
            message=f"{load_text} lbs exceeds most stock suspension capacity. "
                    "Upgraded springs/shocks required.",
        ))
    if load_lbs > 1000:
        warnings.append(LoadWarning(
            severity="high",
            component="Brakes",
            message="Heavy load requires brake upgrade for safe stopping distances.",
        ))
    if load_lbs > 600 and comparison.differences.diameter.percentage > 5:
        warnings.append(LoadWarning(
            severity="moderate",
            component="Drivetrain",
            message="Large tires + heavy load = significant drivetrain stress. Regearing critical.",
        ))
    if load_lbs > 1200:
        warnings.append(LoadWarning(
            severity="high",
            component="Tires",
            message="Load capacity: Ensure tires are rated for this weight. Consider E-rated tires.",
        ))
    if load_lbs > 500:
        warnings.append(LoadWarning(
            severity="moderate",
            component="Payload Capacity",
            message="Verify vehicle payload capacity rating. May exceed GVWR with passengers + gear.",
        ))

    return warnings


def calculate_overland_impact(
    comparison: ComparisonResult,
    expedition_load_lbs: float,
    stress: Optional[StressScoreResult] = None,
) -> OverlandImpact:
    """
    Adjust a comparison for an expedition load.

    Args:
        comparison: Result of ComparisonEngine.compare
        expedition_load_lbs: Added gear weight in lbs
        stress: Drivetrain stress for the comparison, if scored

    Returns:
        OverlandImpact (has_load False when the load is zero or negative)
    """
    if expedition_load_lbs <= 0:
        return OverlandImpact(has_load=False)

    category = categorize_load(expedition_load_lbs)
    multipliers = load_multipliers(expedition_load_lbs)
    adjusted = adjust_stress(stress, multipliers) if stress is not None else None

    stress_text = ""
    if adjusted is not None:
        stress_text = (
            f" Drivetrain stress increased from {adjusted.base} to {adjusted.adjusted} "
            f"(+{adjusted.increase} points, {category.category} impact)."
        )
    summary = (
        f"{category.category} expedition load ({expedition_load_lbs:g} lbs): "
        f"{category.description}.{stress_text} Fuel economy will be reduced by the combined "
        "weight of tires + load. Suspension and brakes require appropriate upgrades for safe operation."
    )

    return OverlandImpact(
        has_load=True,
        expedition_load_lbs=expedition_load_lbs,
        load_category=category,
        multipliers=multipliers,
        adjusted_stress=adjusted,
        fuel_economy=fuel_economy_impact(
            comparison.differences.diameter.percentage, expedition_load_lbs, multipliers
        ),
        braking=braking_impact(expedition_load_lbs, comparison),
        warnings=load_warnings(expedition_load_lbs, comparison),
        summary=summary,
    )

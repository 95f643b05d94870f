"""
Unsprung weight and load capacity analysis.

Severity thresholds depend on intended use. Daily drivers are more
sensitive to added weight; rock crawlers accept heavier, tougher tires.
"""

from typing import Optional

from tirecalc.models.inputs import IntendedUse
from tirecalc.models.outputs import LoadCapacityAnalysis, WeightAnalysis


# Weight change (%) thresholds: (high, medium)
WEIGHT_SEVERITY_THRESHOLDS = {
    IntendedUse.DAILY_DRIVER: (25.0, 12.0),
    IntendedUse.ROCK_CRAWLING: (40.0, 20.0),
}
DEFAULT_WEIGHT_SEVERITY_THRESHOLDS = (30.0, 15.0)

# Capacity change (lbs per tire) thresholds: (critical, important)
HEAVY_USE_LOAD_THRESHOLDS = (-300.0, -150.0)
DEFAULT_LOAD_THRESHOLDS = (-200.0, -100.0)
HEAVY_USES = (IntendedUse.OVERLANDING, IntendedUse.ROCK_CRAWLING)

TIRES_PER_VEHICLE = 4


def weight_severity(weight_change_pct: float, use: IntendedUse) -> str:
    high, medium = WEIGHT_SEVERITY_THRESHOLDS.get(use, DEFAULT_WEIGHT_SEVERITY_THRESHOLDS)
    magnitude = abs(weight_change_pct)
    if magnitude > high:
        return "high"
    if magnitude > medium:
        return "medium"
    return "low"


def weight_recommendations(per_tire_change: float, total_change: float, use: IntendedUse) -> list[str]:
    """Recommendations for a weight change and intended use."""
    recs = []

    if total_change > 60:
        recs.append(
            "Consider upgrading to heavy-duty shocks (Bilstein, Fox, King) to handle increased unsprung weight"
        )
        if use == IntendedUse.ROCK_CRAWLING:
            recs.append("Heavy shocks essential for rock crawling - better control on technical terrain")
        recs.append("Upgraded brakes strongly recommended for safety")
    elif total_change > 40:
        recs.append("Performance shocks recommended for better control")
        recs.append("Monitor brake pad wear - may need upgrades")
    elif total_change > 20:
        if use == IntendedUse.DAILY_DRIVER:
            recs.append("Stock shocks may wear faster - consider upgrade for better ride quality")
        else:
            recs.append("Stock shocks should work but may wear faster")

    if per_tire_change > 20:
        if use == IntendedUse.DAILY_DRIVER:
            recs.append("Expect 1.0-2.0 MPG fuel economy decrease - significant for daily commuting")
        elif use == IntendedUse.OVERLANDING:
            recs.append("Expect 0.5-1.5 MPG decrease - factor into fuel range planning for remote trips")
        else:
            recs.append("Expect 0.5-1.0 MPG fuel economy decrease from weight alone")

    if total_change > 80:
        recs.append("Wheel bearing service intervals should be shortened")
        recs.append("Ball joint and tie rod wear will accelerate")

    if use == IntendedUse.ROCK_CRAWLING and per_tire_change > 0:
        recs.append(
            "Heavier tires often more durable for rock crawling - accept weight trade-off for sidewall strength"
        )
    elif use == IntendedUse.SAND_DESERT and per_tire_change > 10:
        recs.append("Weight increase reduces flotation in sand - may need to air down more (12-15 PSI)")
    elif use == IntendedUse.DAILY_DRIVER and total_change > 30:
        recs.append(
            "Consider if weight penalty worth it for daily use - affects acceleration, braking, and comfort"
        )

    if per_tire_change < -5:
        if use == IntendedUse.DAILY_DRIVER:
            recs.append("Weight reduction improves fuel economy and acceleration - excellent for daily driving")
        elif use == IntendedUse.OVERLANDING:
            recs.append("Lighter tires leave more payload capacity for gear and equipment")

    return recs or ["Weight difference is minimal - no special modifications needed"]


def analyze_weight(
    current_weight_lbs: float,
    new_weight_lbs: float,
    is_estimate: bool,
    use: IntendedUse = IntendedUse.WEEKEND_TRAIL,
) -> WeightAnalysis:
    """
    Unsprung weight impact of the tire change.

    Args:
        current_weight_lbs: Current tire weight
        new_weight_lbs: New tire weight
        is_estimate: True when either weight was estimated from size
        use: Intended use (sets severity thresholds)

    Returns:
        WeightAnalysis
    """
    per_tire = new_weight_lbs - current_weight_lbs
    pct = per_tire / current_weight_lbs * 100
    total = per_tire * TIRES_PER_VEHICLE

    if per_tire > 0:
        acceleration = f"{abs(per_tire):.1f} lbs/tire increase reduces acceleration"
    else:
        acceleration = f"{abs(per_tire):.1f} lbs/tire decrease improves acceleration"

    if total > 40:
        suspension = "Significant unsprung weight increase - suspension may feel harsh, consider upgrading shocks"
        braking = "Braking distances will increase - consider brake upgrades"
        handling = "Reduced suspension compliance - slower rebound over rough terrain"
    else:
        suspension = (
            "Moderate unsprung weight increase - ride quality slightly affected"
            if total > 20 else "Minimal suspension impact"
        )
        braking = "Slightly longer braking distances" if total > 0 else "Improved braking response"
        handling = "Minimal handling impact"

    return WeightAnalysis(
        is_estimate=is_estimate,
        current_per_tire_lbs=current_weight_lbs,
        new_per_tire_lbs=new_weight_lbs,
        current_total_lbs=current_weight_lbs * TIRES_PER_VEHICLE,
        new_total_lbs=new_weight_lbs * TIRES_PER_VEHICLE,
        difference_per_tire_lbs=per_tire,
        difference_percentage=pct,
        difference_total_lbs=total,
        severity=weight_severity(pct, use),
        acceleration=acceleration,
        suspension=suspension,
        braking=braking,
        handling=handling,
        recommendations=weight_recommendations(per_tire, total, use),
    )


def load_severity(capacity_change: float, use: IntendedUse) -> str:
    critical, important = HEAVY_USE_LOAD_THRESHOLDS if use in HEAVY_USES else DEFAULT_LOAD_THRESHOLDS
    if capacity_change < critical:
        return "critical"
    if capacity_change < important:
        return "important"
    if capacity_change < 0:
        return "advisory"
    return "positive"


# (minimum total capacity, assessment) per use; first match wins
SUITABILITY_TABLE = {
    IntendedUse.OVERLANDING: [
        (12000, "Excellent for heavily loaded overland rigs with RTT, gear, armor, and extended fuel/water"),
        (10000, "Good for loaded overlanding with moderate gear - watch total weight with full equipment"),
        (8000, "Marginal for overlanding - limit armor and heavy modifications"),
        (0, "Insufficient capacity for serious overlanding - consider higher load index tires"),
    ],
    IntendedUse.ROCK_CRAWLING: [
        (11000, "Excellent capacity for armor, sliders, heavy bumpers, and recovery gear"),
        (9000, "Good capacity for typical rock crawling armor and protection"),
        (7500, "Adequate for light armor - limit heavy steel bumpers"),
        (0, "Low capacity - verify total vehicle weight with armor stays well under rating"),
    ],
    IntendedUse.DAILY_DRIVER: [
        (9000, "Excellent capacity - more than adequate for daily driving and occasional trips"),
        (7500, "Good capacity for daily driving and light gear"),
        (6000, "Adequate for daily driver without heavy modifications"),
        (0, "Limited capacity - avoid heavy loads or verify vehicle weight"),
    ],
}
DEFAULT_SUITABILITY = [
    (12000, "Excellent for heavily loaded overland rigs with RTT, gear, armor"),
    (10000, "Good for loaded overlanding with moderate gear"),
    (8000, "Adequate for daily driving and light trail use"),
    (0, "Limited capacity - verify vehicle weight is well under tire rating"),
]


def load_suitability(total_capacity: float, use: IntendedUse) -> list[str]:
    for minimum, text in SUITABILITY_TABLE.get(use, DEFAULT_SUITABILITY):
        if total_capacity >= minimum:
            return [text]
    return []


def load_warning(capacity_change: float) -> str:
    if capacity_change < -200:
        return "CRITICAL: Significant load capacity reduction - verify tire rating supports vehicle weight"
    if capacity_change < -100:
        return "IMPORTANT: Reduced load capacity - not recommended for heavy loads or overlanding"
    if capacity_change < 0:
        return "Advisory: Slightly reduced load capacity"
    if capacity_change > 200:
        return "Excellent: Increased load capacity ideal for overlanding and heavy gear"
    return "Load capacity maintained or improved"


def load_recommendations(
    capacity_change: float,
    total_capacity: float,
    load_index: int,
    use: IntendedUse,
) -> list[str]:
    recs = []

    if capacity_change < -200:
        recs.append("CRITICAL: Weigh your vehicle fully loaded to ensure tires are rated appropriately")
        recs.append("Consider higher load index tires (Load Range E) for safety")
        if use == IntendedUse.OVERLANDING:
            recs.append(
                "Capacity reduction dangerous for overlanding - fully loaded weight can easily exceed rating"
            )
    elif capacity_change < -100:
        recs.append("Verify vehicle weight is within safe limits of new tire capacity")
        if use in HEAVY_USES:
            recs.append("Not recommended for heavy overland loads or armor with this capacity reduction")
        else:
            recs.append("Avoid heavy loads with this tire")

    if use == IntendedUse.OVERLANDING:
        if load_index < 115:
            recs.append("Load index <115 marginal for overlanding - especially with RTT, water, gear, and armor")
        if total_capacity < 10000:
            recs.append("Total capacity <10000 lbs limits overlanding capability - weigh rig fully loaded")
        if load_index >= 121:
            recs.append("Load Range E excellent for overlanding - handles heavy gear, water, recovery equipment")
    elif use == IntendedUse.ROCK_CRAWLING:
        if load_index < 113:
            recs.append("Load index <113 not ideal for rock crawling with armor, sliders, and heavy bumpers")
        if total_capacity < 9000:
            recs.append("Total capacity <9000 lbs limits armor options - consider higher rating for protection")
        if load_index >= 121:
            recs.append("Load Range E ideal for rock crawling - supports full armor package")
    elif use == IntendedUse.DAILY_DRIVER:
        if load_index < 110:
            recs.append("Load index <110 adequate for daily driving but limit roof racks and heavy cargo")
        if capacity_change > 200:
            recs.append("Capacity increase provides safety margin - good for occasional hauling or trips")
    else:
        if load_index < 110:
            recs.append("Load index <110 not recommended for armor, roof racks, or expedition builds")
        if total_capacity < 9000:
            recs.append("Total capacity <9000 lbs - limit heavy modifications and cargo weight")

    if capacity_change > 300:
        if use == IntendedUse.OVERLANDING:
            recs.append("Excellent capacity increase - perfect for fully loaded overland expeditions")
        elif use == IntendedUse.ROCK_CRAWLING:
            recs.append("Excellent capacity increase - supports comprehensive armor and recovery gear")
        else:
            recs.append("Excellent capacity increase - well-suited for overlanding and heavy builds")

    if load_index >= 121 and use != IntendedUse.DAILY_DRIVER:
        recs.append("Load Range E rating - excellent for serious off-road and expedition use")

    return recs or ["Load capacity appropriate for typical use"]


def analyze_load_capacity(
    current_index: int,
    new_index: int,
    current_capacity: Optional[float],
    new_capacity: Optional[float],
    use: IntendedUse = IntendedUse.WEEKEND_TRAIL,
) -> Optional[LoadCapacityAnalysis]:
    """
    Load capacity change between two load indexes.

    Returns None when either index is outside the load index table.
    """
    if not current_capacity or not new_capacity:
        return None

    change = new_capacity - current_capacity
    new_total = new_capacity * TIRES_PER_VEHICLE

    return LoadCapacityAnalysis(
        current_load_index=current_index,
        new_load_index=new_index,
        current_capacity_lbs=current_capacity,
        new_capacity_lbs=new_capacity,
        current_total_capacity_lbs=current_capacity * TIRES_PER_VEHICLE,
        new_total_capacity_lbs=new_total,
        load_index_change=new_index - current_index,
        capacity_change_lbs=change,
        capacity_change_percentage=change / current_capacity * 100,
        total_capacity_change_lbs=change * TIRES_PER_VEHICLE,
        severity=load_severity(change, use),
        suitability=load_suitability(new_total, use),
        warning=load_warning(change),
        recommendations=load_recommendations(change, new_total, new_index, use),
    )

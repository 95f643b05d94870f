"""
Compatibility advisories for a tire change.

Advisories describe risk; they never block a calculation. Extreme changes
still produce a full comparison, flagged with a critical advisory.
"""

from tirecalc.models.inputs import IntendedUse
from tirecalc.models.outputs import (
    Advisory,
    AdvisorySeverity,
    Differences,
    SpeedometerError,
    TireDescriptor,
)


def compatibility_advisories(
    current: TireDescriptor,
    new: TireDescriptor,
    differences: Differences,
    speedometer: SpeedometerError,
    use: IntendedUse = IntendedUse.WEEKEND_TRAIL,
) -> list[Advisory]:
    """
    Severity-tagged warnings for a tire change, most severe first.

    Args:
        current: Current tire
        new: New tire
        differences: Dimensional differences
        speedometer: Speedometer error for the pair
        use: Intended use

    Returns:
        List of Advisory objects (possibly empty)
    """
    advisories: list[Advisory] = []
    diameter_pct = differences.diameter.percentage
    width_pct = differences.width.percentage

    if diameter_pct > 15:
        advisories.append(Advisory(
            severity=AdvisorySeverity.CRITICAL,
            category="Drivetrain",
            message="Diameter increase >15% is EXTREME",
            detail=(
                "Serious drivetrain damage likely without significant modifications. "
                "Re-gearing is mandatory. Transmission, CV axles, and wheel bearings "
                "will be severely stressed."
            ),
            action="Reconsider tire size or budget for comprehensive drivetrain upgrades",
        ))
    elif diameter_pct > 10:
        advisories.append(Advisory(
            severity=AdvisorySeverity.IMPORTANT,
            category="Drivetrain",
            message="Diameter increase >10%",
            detail="Re-gearing strongly recommended to avoid drivetrain strain and poor performance.",
            action="Budget for axle re-gearing to restore performance",
        ))

    if diameter_pct < -10:
        advisories.append(Advisory(
            severity=AdvisorySeverity.IMPORTANT,
            category="Ground Clearance",
            message="Diameter decrease >10%",
            detail=(
                "Significant reduction in ground clearance and off-road capability. "
                "Consider if this is intentional."
            ),
        ))

    if width_pct > 20:
        advisories.append(Advisory(
            severity=AdvisorySeverity.IMPORTANT,
            category="Clearance",
            message="Significant width increase",
            detail=(
                "Verify fender clearance and consider wheel offset changes. "
                "Rubbing likely at full lock or articulation."
            ),
            action="Plan for fender trimming, body mount chop, or wheel spacers",
        ))

    if differences.diameter.absolute > 2:
        advisories.append(Advisory(
            severity=AdvisorySeverity.IMPORTANT,
            category="Braking",
            message="Braking performance will be reduced",
            detail=(
                "Larger tire diameter increases rotational mass and reduces braking leverage. "
                "Brake pad wear will increase."
            ),
            action="Upgrade brake pads, test stopping distances, consider bigger brake kit",
        ))

    if new.aspect_ratio_pct < 60 and current.aspect_ratio_pct >= 60:
        advisories.append(Advisory(
            severity=AdvisorySeverity.ADVISORY,
            category="Off-Road Capability",
            message="Low profile tire for off-road",
            detail=(
                "Tires with aspect ratio <60 are vulnerable to sidewall damage "
                "and wheel damage on rocks and sharp impacts."
            ),
        ))

    if diameter_pct > 5:
        advisories.append(Advisory(
            severity=AdvisorySeverity.ADVISORY,
            category="Fuel Economy",
            message="Fuel economy will decrease",
            detail=(
                "Larger tire diameter increases rotational mass and rolling resistance. "
                "Expect 1-3 MPG decrease depending on driving conditions and gearing."
            ),
            action="Factor increased fuel costs into build budget",
        ))

    if speedometer.ratio > 1.05:
        error_pct = (speedometer.ratio - 1) * 100
        advisories.append(Advisory(
            severity=AdvisorySeverity.ADVISORY,
            category="Speedometer",
            message=f"Speedometer will read {error_pct:.1f}% slow",
            detail="Indicated speed will be lower than actual speed. Odometer accuracy is affected.",
            action="Recalibrate speedometer or use GPS for accurate speed",
        ))

    if not new.is_load_range_lt and use != IntendedUse.DAILY_DRIVER:
        advisories.append(Advisory(
            severity=AdvisorySeverity.ADVISORY,
            category="Load Rating",
            message="P-metric tire for off-road use",
            detail=(
                "P-metric tires have lower load ratings and weaker sidewalls than LT tires. "
                "Not ideal for heavy loads, armor, or rock crawling."
            ),
            action="Consider LT-rated tires for serious off-road and overland use",
        ))

    if new.wheel_diameter_in != current.wheel_diameter_in:
        advisories.append(Advisory(
            severity=AdvisorySeverity.INFO,
            category="Wheels",
            message="Wheel diameter change",
            detail=(
                "Different wheels required. Ensure new wheels fit your vehicle "
                "(bolt pattern, hub bore, load rating)."
            ),
        ))

    return advisories

"""
Gearing formulas.

ASSUMPTIONS:
- Engine RPM = speed(mph) * axle * transmission * 336 / diameter(in).
  336 is the rounded value of 63360 / (60 * pi) = 336.13 used by gearing
  charts; the rounding biases RPM by -0.04%.
- Crawl ratio is a pure gear-train product (axle * transfer low * first
  gear). Tire diameter changes crawl *speed*, never the ratio.
"""

from tirecalc.physics.units import RPM_CONSTANT

# Reference highway speed for RPM comparisons
HIGHWAY_TEST_SPEED_MPH = 65.0

# Engine speed used to express crawl speed in low range
CRAWL_REFERENCE_RPM = 1000.0


def engine_rpm(
    speed_mph: float,
    axle_ratio: float,
    transmission_ratio: float,
    tire_diameter_in: float,
) -> float:
    """
    Engine RPM at a road speed.

    Args:
        speed_mph: Road speed
        axle_ratio: Ring and pinion ratio
        transmission_ratio: Engaged transmission gear ratio
        tire_diameter_in: Rolling diameter

    Returns:
        Engine speed in RPM
    """
    return speed_mph * axle_ratio * transmission_ratio * RPM_CONSTANT / tire_diameter_in


def effective_gear_ratio(axle_ratio: float, current_diameter_in: float, new_diameter_in: float) -> float:
    """Axle ratio as felt on the new tires: axle * current / new."""
    return axle_ratio * (current_diameter_in / new_diameter_in)


def crawl_ratio(axle_ratio: float, transfer_case_low_ratio: float, first_gear_ratio: float) -> float:
    """Total low-range reduction. Independent of tire size."""
    return axle_ratio * transfer_case_low_ratio * first_gear_ratio


def crawl_speed_mph(
    tire_diameter_in: float,
    total_crawl_ratio: float,
    rpm: float = CRAWL_REFERENCE_RPM,
) -> float:
    """Road speed in low range at an engine RPM (inverse of engine_rpm)."""
    return rpm * tire_diameter_in / (total_crawl_ratio * RPM_CONSTANT)


def restoration_ratio(current_ratio: float, current_diameter_in: float, new_diameter_in: float) -> float:
    """Axle ratio that restores the pre-upgrade effective gearing."""
    return current_ratio * (new_diameter_in / current_diameter_in)


def ratio_for_target_rpm(
    target_rpm: float,
    tire_diameter_in: float,
    transmission_ratio: float = 1.0,
    speed_mph: float = HIGHWAY_TEST_SPEED_MPH,
) -> float:
    """Axle ratio that yields target_rpm at speed_mph (engine_rpm solved for the axle)."""
    return target_rpm * tire_diameter_in / (speed_mph * transmission_ratio * RPM_CONSTANT)


def min_axle_ratio_for_crawl(
    crawl_ratio_min: float,
    transfer_case_low_ratio: float,
    first_gear_ratio: float,
) -> float:
    """Smallest axle ratio with axle * transfer low * first >= crawl_ratio_min."""
    return crawl_ratio_min / (transfer_case_low_ratio * first_gear_ratio)

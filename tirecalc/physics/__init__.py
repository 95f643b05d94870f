"""
Physics calculations for tire and drivetrain analysis.
"""

from tirecalc.physics.units import (
    ureg,
    Q_,
    MM_PER_INCH,
    INCHES_PER_MILE,
    RPM_CONSTANT,
    RPM_CONSTANT_EXACT,
    in_to_mm,
    mm_to_in,
)
from tirecalc.physics.tire_size import (
    parse_tire_size,
    resolve_diameter,
    circumference,
    revolutions_per_mile,
    tire_metrics,
)
from tirecalc.physics.drivetrain import (
    engine_rpm,
    effective_gear_ratio,
    crawl_ratio,
    crawl_speed_mph,
    restoration_ratio,
    ratio_for_target_rpm,
    min_axle_ratio_for_crawl,
)
from tirecalc.physics.weight import estimate_tire_weight, load_capacity_lbs
from tirecalc.physics.rotational import calculate_rotational_impact

__all__ = [
    "ureg",
    "Q_",
    "MM_PER_INCH",
    "INCHES_PER_MILE",
    "RPM_CONSTANT",
    "RPM_CONSTANT_EXACT",
    "in_to_mm",
    "mm_to_in",
    "parse_tire_size",
    "resolve_diameter",
    "circumference",
    "revolutions_per_mile",
    "tire_metrics",
    "engine_rpm",
    "effective_gear_ratio",
    "crawl_ratio",
    "crawl_speed_mph",
    "restoration_ratio",
    "ratio_for_target_rpm",
    "min_axle_ratio_for_crawl",
    "estimate_tire_weight",
    "load_capacity_lbs",
    "calculate_rotational_impact",
]

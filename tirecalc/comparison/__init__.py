"""Tire comparison: dimensions, speedometer, drivetrain, clearance, weight and advisories."""

from tirecalc.comparison.advisories import compatibility_advisories
from tirecalc.comparison.engine import ComparisonEngine, compare_tires

__all__ = [
    "ComparisonEngine",
    "compare_tires",
    "compatibility_advisories",
]

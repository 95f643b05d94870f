"""
Unit registry and conversion constants.

Tire sizes mix millimetres (metric section width) with inches (wheel and
flotation diameters), and speeds are in mph. Conversion factors are taken
from pint so that every calculation shares one source of truth.
"""

import math

import pint

# Shared unit registry for the entire application
ureg = pint.UnitRegistry()

# Shorthand for creating quantities
Q_ = ureg.Quantity

MM_PER_INCH: float = Q_(1, "inch").to("millimeter").magnitude
INCHES_PER_MILE: float = Q_(1, "mile").to("inch").magnitude

# Engine RPM constant: inches per mile / (minutes per hour * pi) = 336.13.
# The rounded value is the convention used in gearing charts.
RPM_CONSTANT_EXACT: float = INCHES_PER_MILE / (60 * math.pi)
RPM_CONSTANT: float = 336.0


def in_to_mm(inches: float) -> float:
    """Convert inches to millimetres."""
    return Q_(inches, "inch").to("millimeter").magnitude


def mm_to_in(mm: float) -> float:
    """Convert millimetres to inches."""
    return Q_(mm, "millimeter").to("inch").magnitude


def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves upward (2.5 -> 3, -2.5 -> -2), unlike round()."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale

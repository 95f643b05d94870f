"""
Tire size parsing and diameter resolution.

Supported notations (case-insensitive, whitespace-tolerant):
- P-metric:  265/70R17, P265/70R17
- LT-metric: LT285/75R16, LT315/70R17
- Flotation: 35x12.50R17, 37x13.50R17, 33x10.50-15

ASSUMPTIONS:
- Metric diameters come from the measured table when the size is listed
  (+/-0.2in), otherwise from 2 * sidewall + wheel (+/-0.5in, less accurate:
  real tires usually measure smaller than the formula).
- Flotation sizes state the diameter directly; the aspect ratio is
  back-computed from the sidewall for downstream fitment logic.
- Flotation sizes are treated as LT construction.
"""

import logging
import math
import re
from typing import Optional, Union

from pydantic import ValidationError

from tirecalc.catalog.models import ReferenceData
from tirecalc.catalog.reference import default_reference
from tirecalc.errors import ParseError
from tirecalc.models.outputs import DiameterSource, TireDescriptor, TireFormat, TireMetrics
from tirecalc.physics.units import INCHES_PER_MILE, MM_PER_INCH

logger = logging.getLogger(__name__)

METRIC_PATTERN = re.compile(r"^(P|LT)?(\d+)/(\d+)R(\d+(?:\.\d+)?)$")
FLOTATION_PATTERN = re.compile(r"^(\d+(?:\.\d+)?)X(\d+(?:\.\d+)?)[R-](\d+(?:\.\d+)?)$")


def normalize_size(text: str) -> str:
    """Uppercase and drop all whitespace."""
    return re.sub(r"\s+", "", text).upper()


def measured_key(width_mm: int, aspect_ratio: int, wheel_in: float) -> str:
    """Lookup key for the measured-diameter table, e.g. '285/75R17'."""
    return f"{width_mm}/{aspect_ratio}R{wheel_in:g}"


def formula_diameter(width_mm: float, aspect_ratio: float, wheel_in: float) -> float:
    """Overall diameter from the size: 2 * sidewall + wheel (inches)."""
    sidewall_in = width_mm * aspect_ratio / 100 / MM_PER_INCH
    return 2 * sidewall_in + wheel_in


def resolve_diameter(
    width_mm: int,
    aspect_ratio: int,
    wheel_in: float,
    reference: Optional[ReferenceData] = None,
) -> tuple[float, DiameterSource]:
    """
    Resolve a metric tire's diameter.

    Args:
        width_mm: Section width in mm
        aspect_ratio: Aspect ratio in percent
        wheel_in: Wheel diameter in inches
        reference: Reference dataset (defaults to built-in tables)

    Returns:
        Tuple of (diameter_in, source)
    """
    reference = reference or default_reference()
    key = measured_key(width_mm, aspect_ratio, wheel_in)
    measured = reference.measured_diameter(key)
    if measured is not None:
        logger.debug("Using measured diameter %.2fin for %s", measured, key)
        return measured, DiameterSource.MEASURED

    diameter = formula_diameter(width_mm, aspect_ratio, wheel_in)
    logger.debug("No measured diameter for %s, formula gives %.2fin", key, diameter)
    return diameter, DiameterSource.FORMULA


def _parse_metric(match: re.Match, raw: str, reference: Optional[ReferenceData]) -> TireDescriptor:
    prefix, width_s, aspect_s, wheel_s = match.groups()
    width_mm = int(width_s)
    aspect_ratio = int(aspect_s)
    wheel_in = float(wheel_s)
    if width_mm == 0 or aspect_ratio == 0 or wheel_in == 0:
        raise ParseError(raw, f"Tire size has a zero dimension: {raw!r}")

    is_lt = prefix == "LT"
    sidewall_mm = width_mm * aspect_ratio / 100
    diameter_in, source = resolve_diameter(width_mm, aspect_ratio, wheel_in, reference)

    return TireDescriptor(
        format=TireFormat.LT_METRIC if is_lt else TireFormat.P_METRIC,
        section_width_mm=width_mm,
        aspect_ratio_pct=aspect_ratio,
        wheel_diameter_in=wheel_in,
        sidewall_height_in=sidewall_mm / MM_PER_INCH,
        sidewall_height_mm=sidewall_mm,
        diameter_in=diameter_in,
        diameter_mm=diameter_in * MM_PER_INCH,
        is_load_range_lt=is_lt,
        diameter_source=source,
        raw_input=raw,
    )


def _parse_flotation(match: re.Match, raw: str) -> TireDescriptor:
    diameter_in = float(match.group(1))
    width_in = float(match.group(2))
    wheel_in = float(match.group(3))
    if width_in == 0 or wheel_in == 0:
        raise ParseError(raw, f"Tire size has a zero dimension: {raw!r}")
    if diameter_in <= wheel_in:
        raise ParseError(raw, f"Overall diameter must exceed wheel diameter: {raw!r}")

    sidewall_in = (diameter_in - wheel_in) / 2
    aspect_ratio = round(sidewall_in / width_in * 100)

    return TireDescriptor(
        format=TireFormat.FLOTATION,
        section_width_mm=width_in * MM_PER_INCH,
        aspect_ratio_pct=aspect_ratio,
        wheel_diameter_in=wheel_in,
        sidewall_height_in=sidewall_in,
        sidewall_height_mm=sidewall_in * MM_PER_INCH,
        diameter_in=diameter_in,
        diameter_mm=diameter_in * MM_PER_INCH,
        is_load_range_lt=True,
        diameter_source=DiameterSource.FORMULA,
        raw_input=raw,
    )


def parse_tire_size(text: str, reference: Optional[ReferenceData] = None) -> TireDescriptor:
    """
    Parse a tire size string into a TireDescriptor.

    Args:
        text: Tire size, e.g. '285/75R17', 'LT315/70R17' or '35x12.50R17'
        reference: Reference dataset for measured diameters

    Returns:
        TireDescriptor with the resolved diameter

    Raises:
        ParseError: If the string matches neither the metric nor the flotation grammar
    """
    if not isinstance(text, str) or not text.strip():
        raise ParseError(str(text), "Tire size must be a non-empty string")

    raw = normalize_size(text)

    try:
        match = FLOTATION_PATTERN.match(raw)
        if match:
            return _parse_flotation(match, raw)

        match = METRIC_PATTERN.match(raw)
        if match:
            return _parse_metric(match, raw, reference)
    except ValidationError as e:
        raise ParseError(text, f"Tire size {text!r} has out-of-range dimensions") from e

    raise ParseError(
        text,
        f"Unable to parse tire size: {text!r}. "
        "Supported formats: 265/70R17, LT285/75R16, 35x12.50R17",
    )


def coerce_tire(
    tire: Union[TireDescriptor, str],
    reference: Optional[ReferenceData] = None,
) -> TireDescriptor:
    """Accept either a parsed descriptor or a size string."""
    if isinstance(tire, TireDescriptor):
        return tire
    return parse_tire_size(tire, reference)


def circumference(diameter_in: float) -> float:
    """Tire circumference in inches."""
    return diameter_in * math.pi


def revolutions_per_mile(circumference_in: float) -> float:
    """Tire revolutions per mile from circumference in inches."""
    return INCHES_PER_MILE / circumference_in


def tire_metrics(tire: TireDescriptor) -> TireMetrics:
    """Rolling characteristics for a tire."""
    circ = circumference(tire.diameter_in)
    return TireMetrics(
        tire=tire,
        circumference_in=circ,
        circumference_mm=circ * MM_PER_INCH,
        revolutions_per_mile=revolutions_per_mile(circ),
        display=tire.display,
    )

"""
Tire weight estimation and load index lookup.

ASSUMPTIONS:
- Weight estimate calibrated against popular all-terrain and mud-terrain
  tires; typically within +/-8 lbs.
- Base weight scales with diameter: 1.5 lbs/in for P-metric, 1.85 lbs/in
  for LT and flotation construction.
- Width above 9in adds weight; very wide flotation tires add the most.
"""

from typing import Optional

from tirecalc.catalog.models import ReferenceData
from tirecalc.catalog.reference import default_reference
from tirecalc.models.outputs import TireDescriptor, TireFormat


def estimate_tire_weight(tire: TireDescriptor) -> float:
    """
    Estimate a tire's weight from its size.

    Args:
        tire: Parsed tire

    Returns:
        Estimated weight in lbs, rounded to the nearest pound
    """
    width_in = tire.section_width_in
    is_flotation = tire.format == TireFormat.FLOTATION

    weight = tire.diameter_in * (1.85 if tire.is_load_range_lt else 1.5)

    if is_flotation:
        width_multiplier = 1.1 if width_in > 12 else 0.85
    else:
        width_multiplier = 0.7 if tire.is_load_range_lt else 0.5
    weight += max(0.0, (width_in - 9) * width_multiplier)

    # Aspect ratio correction
    if tire.aspect_ratio_pct < 65:
        weight *= 0.92
    elif tire.aspect_ratio_pct > 75:
        weight *= 1.08

    # Very wide LT metric tires (315mm+)
    if tire.is_load_range_lt and tire.section_width_mm >= 315 and not is_flotation:
        weight *= 1.10

    return float(int(weight + 0.5))


def load_capacity_lbs(load_index: int, reference: Optional[ReferenceData] = None) -> Optional[float]:
    """Capacity per tire for a load index, or None when the index is outside the table."""
    reference = reference or default_reference()
    return reference.load_capacity(load_index)

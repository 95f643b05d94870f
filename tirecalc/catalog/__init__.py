"""
Reference data: measured diameters, gear ratio catalog, use-case profiles,
load index table, vehicle suspension lists and community gear ratio builds.
"""

from tirecalc.catalog.models import (
    GearPriority,
    GearRecommendationRow,
    PopularRatio,
    ReferenceData,
    UseCaseProfile,
)
from tirecalc.catalog.reference import default_reference
from tirecalc.catalog.loader import get_reference, load_gear_recommendations, load_reference
from tirecalc.catalog.matcher import (
    find_real_world_recommendations,
    popular_gear_ratios_for_tire_size,
)

__all__ = [
    "GearPriority",
    "GearRecommendationRow",
    "PopularRatio",
    "ReferenceData",
    "UseCaseProfile",
    "default_reference",
    "get_reference",
    "load_gear_recommendations",
    "load_reference",
    "find_real_world_recommendations",
    "popular_gear_ratios_for_tire_size",
]

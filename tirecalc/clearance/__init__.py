"""
Tire fitment (rubbing) probability by suspension type and lift height.
"""

from tirecalc.clearance.probability import (
    ClearanceProbabilityEstimator,
    estimate_from_comparison,
    suspension_for_vehicle,
)

__all__ = ["ClearanceProbabilityEstimator", "estimate_from_comparison", "suspension_for_vehicle"]

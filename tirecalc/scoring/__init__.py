"""
Scoring for tire upgrades.

Condenses a comparison into a drivetrain stress score and adjusts it for
expedition loads.
"""

from tirecalc.scoring.overland import calculate_overland_impact
from tirecalc.scoring.stress import DrivetrainStressScorer, score_comparison

__all__ = ["DrivetrainStressScorer", "score_comparison", "calculate_overland_impact"]

"""
Community regearing guidance by tire change size.
"""

from tirecalc.guidance.regearing import RegearingGuidanceLookup, guidance_from_comparison, scenario_for

__all__ = ["RegearingGuidanceLookup", "guidance_from_comparison", "scenario_for"]

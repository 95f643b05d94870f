"""
Pydantic models for tire comparison inputs and outputs.
"""

from tirecalc.models.inputs import (
    BudgetLevel,
    ClearanceParams,
    DrivetrainConfig,
    IntendedUse,
    PlanTimeline,
    StressParams,
    SuspensionType,
    TireSpecOverrides,
    UpgradeRequest,
)
from tirecalc.models.outputs import (
    Advisory,
    AdvisorySeverity,
    ClearanceEstimate,
    ClearanceImpact,
    ComparisonResult,
    Differences,
    DiameterSource,
    DrivetrainImpact,
    ImpactLevel,
    LoadCapacityAnalysis,
    OverlandImpact,
    RegearCandidate,
    RegearingGuidance,
    RegearRecommendation,
    RotationalImpact,
    SpeedometerError,
    StressScoreResult,
    TireDescriptor,
    TireFormat,
    TireMetrics,
    UpgradePath,
    WeightAnalysis,
)

__all__ = [
    "BudgetLevel",
    "ClearanceParams",
    "DrivetrainConfig",
    "IntendedUse",
    "PlanTimeline",
    "StressParams",
    "SuspensionType",
    "TireSpecOverrides",
    "UpgradeRequest",
    "Advisory",
    "AdvisorySeverity",
    "ClearanceEstimate",
    "ClearanceImpact",
    "ComparisonResult",
    "Differences",
    "DiameterSource",
    "DrivetrainImpact",
    "ImpactLevel",
    "LoadCapacityAnalysis",
    "OverlandImpact",
    "RegearCandidate",
    "RegearingGuidance",
    "RegearRecommendation",
    "RotationalImpact",
    "SpeedometerError",
    "StressScoreResult",
    "TireDescriptor",
    "TireFormat",
    "TireMetrics",
    "UpgradePath",
    "WeightAnalysis",
]

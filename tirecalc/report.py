"""
Full upgrade report.

Runs every analysis that applies to an UpgradeRequest: comparison, stress
score, clearance estimate, regearing guidance, optional re-gear candidates,
expedition load, the supporting upgrade path and matching community
builds.
"""

import logging
from typing import Optional

from pydantic import BaseModel, Field

from tirecalc.catalog.loader import get_reference, load_gear_recommendations
from tirecalc.catalog.matcher import find_real_world_recommendations
from tirecalc.catalog.models import GearRecommendationRow, ReferenceData
from tirecalc.clearance.probability import estimate_from_comparison, suspension_for_vehicle
from tirecalc.comparison.engine import ComparisonEngine
from tirecalc.generator.regear import RegearEngine
from tirecalc.generator.upgrade_path import UpgradePathPlanner
from tirecalc.guidance.regearing import guidance_from_comparison
from tirecalc.models.inputs import SuspensionType, UpgradeRequest
from tirecalc.models.outputs import (
    ClearanceEstimate,
    ComparisonResult,
    OverlandImpact,
    RegearingGuidance,
    RegearRecommendation,
    StressScoreResult,
    UpgradePath,
)
from tirecalc.scoring.overland import calculate_overland_impact
from tirecalc.scoring.stress import score_comparison

logger = logging.getLogger(__name__)


class UpgradeReport(BaseModel):
    """Everything reported for one tire upgrade request."""

    model_config = {"frozen": True}

    vehicle: Optional[str] = None
    comparison: ComparisonResult
    drivetrain_stress: Optional[StressScoreResult] = Field(
        default=None, description="None when no axle gear ratio was supplied"
    )
    clearance_estimate: ClearanceEstimate
    regearing_guidance: Optional[RegearingGuidance] = None
    regear: Optional[RegearRecommendation] = None
    overland: Optional[OverlandImpact] = None
    upgrade_path: UpgradePath
    community_builds: list[GearRecommendationRow] = Field(default_factory=list)


def build_report(
    request: UpgradeRequest,
    reference: Optional[ReferenceData] = None,
    gear_recommendations: Optional[list[GearRecommendationRow]] = None,
) -> UpgradeReport:
    """
    Build the full report for a request.

    Args:
        request: Validated upgrade request
        reference: Reference dataset (defaults to the process-wide dataset)
        gear_recommendations: Community builds (defaults to the bundled CSV)

    Returns:
        UpgradeReport

    Raises:
        ParseError: If a tire size cannot be parsed
        InvalidConfigError: If a numeric input is invalid
    """
    reference = reference or get_reference()

    comparison = ComparisonEngine(reference).compare(
        request.current_tire,
        request.new_tire,
        drivetrain=request.drivetrain,
        overrides=request.tire_specs,
        intended_use=request.intended_use,
    )

    stress = score_comparison(comparison, request.vehicle_weight_lbs, request.intended_use)

    suspension = request.suspension_type
    if suspension is None:
        suspension = (
            suspension_for_vehicle(request.vehicle, reference) if request.vehicle else SuspensionType.IFS
        )
    clearance = estimate_from_comparison(comparison, suspension, request.lift_height_in)

    regear = None
    if request.include_regear:
        if request.drivetrain.has_axle_ratio:
            regear = RegearEngine(reference).recommend(
                comparison,
                request.drivetrain.axle_gear_ratio,
                request.intended_use,
                request.drivetrain,
            )
        else:
            logger.warning("Re-gear candidates need an axle gear ratio; skipping")

    overland = None
    if request.expedition_load_lbs > 0:
        overland = calculate_overland_impact(comparison, request.expedition_load_lbs, stress)

    upgrade_path = UpgradePathPlanner(request.budget_level, request.plan_timeline).plan(
        comparison, stress, clearance
    )

    community: list[GearRecommendationRow] = []
    if request.vehicle and request.drivetrain.has_axle_ratio:
        rows = gear_recommendations if gear_recommendations is not None else load_gear_recommendations()
        community = find_real_world_recommendations(
            rows,
            request.vehicle,
            comparison.current.diameter_in,
            comparison.new.diameter_in,
            request.drivetrain.axle_gear_ratio,
        )

    return UpgradeReport(
        vehicle=request.vehicle,
        comparison=comparison,
        drivetrain_stress=stress,
        clearance_estimate=clearance,
        regearing_guidance=guidance_from_comparison(comparison, request.intended_use),
        regear=regear,
        overland=overland,
        upgrade_path=upgrade_path,
        community_builds=community,
    )

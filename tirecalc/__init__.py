"""
Tire Upgrade Calculator (tirecalc)

Compares a current tire size against a new one and reports dimensional
differences, speedometer error, effective gearing, engine RPM, crawl
ratio, clearance risk, drivetrain stress, re-gear recommendations and
the supporting upgrade path.

Estimates are conservative rules of thumb for off-road and overland
builds; verify fitment on the vehicle before buying tires.

Usage:
    python -m tirecalc compare 265/70R17 285/75R17 --axle-ratio 3.73
    python -m tirecalc parse 35x12.50R17
    python -m tirecalc make-example
    python -m tirecalc compare --input example_request.json
"""

__version__ = "0.1.0"
__author__ = "Tire Upgrade Calculator Project"

from tirecalc.errors import InvalidConfigError, MissingDataWarning, ParseError
from tirecalc.models.inputs import DrivetrainConfig, IntendedUse, SuspensionType, TireSpecOverrides
from tirecalc.models.outputs import ComparisonResult, TireDescriptor
from tirecalc.physics.tire_size import parse_tire_size
from tirecalc.comparison.engine import ComparisonEngine, compare_tires
from tirecalc.scoring.stress import DrivetrainStressScorer
from tirecalc.clearance.probability import ClearanceProbabilityEstimator
from tirecalc.generator.regear import RegearEngine
from tirecalc.generator.upgrade_path import UpgradePathPlanner
from tirecalc.guidance.regearing import RegearingGuidanceLookup

__all__ = [
    "InvalidConfigError",
    "MissingDataWarning",
    "ParseError",
    "DrivetrainConfig",
    "IntendedUse",
    "SuspensionType",
    "TireSpecOverrides",
    "ComparisonResult",
    "TireDescriptor",
    "parse_tire_size",
    "ComparisonEngine",
    "compare_tires",
    "DrivetrainStressScorer",
    "ClearanceProbabilityEstimator",
    "RegearEngine",
    "UpgradePathPlanner",
    "RegearingGuidanceLookup",
]

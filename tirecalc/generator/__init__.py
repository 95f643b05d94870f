"""
Re-gear candidates and upgrade path planning.

Proposes catalog axle ratios after a tire change, scores them against
the intended use and plans the supporting modifications.
"""

from tirecalc.generator.regear import RegearEngine, regear_necessity
from tirecalc.generator.upgrade_path import UpgradePathPlanner, plan_upgrade_path

__all__ = ["RegearEngine", "regear_necessity", "UpgradePathPlanner", "plan_upgrade_path"]

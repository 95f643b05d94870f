"""
Helpers to turn an upgrade report into a compact, human-readable console
summary. JSON goes to stdout; this summary goes to stderr so that the two
can be separated.
"""

from __future__ import annotations

import sys
from typing import Any, Optional, TextIO

from tirecalc.models.outputs import AdvisorySeverity
from tirecalc.report import UpgradeReport


def _fmt_float(value: Any, unit: str = "", digits: int = 2, signed: bool = False) -> str:
    """Safely format a float with optional unit suffix."""
    try:
        fval = float(value)
    except (TypeError, ValueError):
        return "n/a"
    sign = "+" if signed else ""
    suffix = f" {unit}" if unit else ""
    return f"{fval:{sign}.{digits}f}{suffix}"


def print_readable_summary(report: UpgradeReport, stream: Optional[TextIO] = None) -> None:
    """
    Print a human-friendly summary of an upgrade report.

    Args:
        report: Report built by build_report
        stream: Where to print (default: the current sys.stderr)
    """
    stream = stream or sys.stderr

    def out(line: str = "") -> None:
        print(line, file=stream)

    comparison = report.comparison
    diff = comparison.differences

    out(f"\nSummary: {comparison.current.display} -> {comparison.new.display}")
    out(
        f"  Diameter: {_fmt_float(comparison.current.diameter_in, 'in')} -> "
        f"{_fmt_float(comparison.new.diameter_in, 'in')} "
        f"({_fmt_float(diff.diameter.percentage, '%', 1, signed=True)})"
    )
    out(f"  Ground clearance: {_fmt_float(diff.ground_clearance.gain_in, 'in', signed=True)}")

    reading = comparison.speedometer_error.at(60.0)
    if reading is not None:
        out(f"  Speedometer: {reading.correction}")

    impact = comparison.drivetrain_impact
    if impact is not None:
        out(
            f"  Effective ratio: {_fmt_float(impact.effective_gear_ratio.original)} -> "
            f"{_fmt_float(impact.effective_gear_ratio.new)} | RPM: {impact.rpm.summary}"
        )

    if report.drivetrain_stress is not None:
        stress = report.drivetrain_stress
        out(
            f"  Drivetrain stress: {stress.score}/100 ({stress.classification.value}), "
            f"regearing {stress.regearing.recommendation}"
        )

    clearance = report.clearance_estimate
    out(
        f"  Clearance: {clearance.probability}% rub risk ({clearance.risk_class.value}, "
        f"{clearance.suspension_type.value})"
    )

    if report.regear is not None and report.regear.best is not None:
        best = report.regear.best
        out(f"  Best re-gear: {best.ratio:g} ({best.verdict.recommendation})")

    if report.overland is not None and report.overland.has_load:
        out(f"  Expedition load: {report.overland.load_category.category}")

    if report.regearing_guidance is not None:
        out(f"  Guidance: {report.regearing_guidance.recommendation}")

    path = report.upgrade_path
    if path.upgrades:
        cost = path.estimated_cost
        out(
            f"  Upgrade path ({path.budget_level.value}): {path.total_upgrades} upgrades, "
            f"{path.essential_upgrades} essential, ${cost.cost_range.min:,}-${cost.cost_range.max:,}"
        )
        for upgrade in path.upgrades:
            out(f"    {upgrade.priority}. {upgrade.upgrade} ({upgrade.necessity})")

    if report.community_builds:
        out(f"  Community builds: {len(report.community_builds)} similar")
        for row in report.community_builds:
            out(f"    - {row.vehicle_type}: {row.stock_gear_ratio:g} -> {row.recommended_gear_ratio:g} ({row.notes})")

    important = [
        a for a in comparison.advisories
        if a.severity in (AdvisorySeverity.CRITICAL, AdvisorySeverity.IMPORTANT)
    ]
    if important:
        out("\nWarnings:")
        for advisory in important:
            out(f"  - [{advisory.severity.value}] {advisory.message}")

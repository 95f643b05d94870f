"""
Command-line interface for the tire upgrade calculator.

Usage:
    python -m tirecalc compare 265/70R17 285/75R17 [--axle-ratio 3.73] [--output report.json]
    python -m tirecalc compare --input request.json [--output report.json]
    python -m tirecalc parse 35x12.50R17
    python -m tirecalc clearance --suspension ifs --lift 2 265/70R17 285/75R17
    python -m tirecalc make-example [--output example_request.json]
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from tirecalc import __version__
from tirecalc.cli.readable_output import print_readable_summary
from tirecalc.clearance.probability import estimate_from_comparison
from tirecalc.comparison.engine import ComparisonEngine
from tirecalc.core.config import get_settings
from tirecalc.core.logging import setup_logging
from tirecalc.errors import InvalidConfigError, ParseError
from tirecalc.models.inputs import (
    BudgetLevel,
    DrivetrainConfig,
    IntendedUse,
    PlanTimeline,
    SuspensionType,
    TireSpecOverrides,
    UpgradeRequest,
)
from tirecalc.physics.tire_size import parse_tire_size, tire_metrics
from tirecalc.report import build_report

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tirecalc",
        description="Tire Upgrade Calculator - compare tire sizes and see the effect on "
                    "speedometer, gearing, clearance and drivetrain stress.",
    )
    parser.add_argument("--version", action="version", version=f"tirecalc {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level for progress messages (default: TIRECALC_LOG_LEVEL or INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # make-example command
    example_parser = subparsers.add_parser(
        "make-example",
        help="Generate an example request JSON file",
    )
    example_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=Path("example_request.json"),
        help="Output path for example file (default: example_request.json)",
    )

    # compare command
    compare_parser = subparsers.add_parser(
        "compare",
        help="Compare a current and a new tire size",
    )
    compare_parser.add_argument("current", nargs="?", help="Current tire size, e.g. 265/70R17")
    compare_parser.add_argument("new", nargs="?", help="New tire size, e.g. 285/75R17 or 35x12.50R17")
    compare_parser.add_argument(
        "--input", "-i",
        type=Path,
        default=None,
        help="Path to JSON request file (replaces the positional sizes and options)",
    )
    compare_parser.add_argument("--axle-ratio", type=float, default=None, help="Axle gear ratio, e.g. 3.73")
    compare_parser.add_argument(
        "--top-gear", type=float, default=1.0, help="Transmission top gear ratio (default: 1.0)"
    )
    compare_parser.add_argument(
        "--tc-low", type=float, default=2.5, help="Transfer case low range ratio (default: 2.5)"
    )
    compare_parser.add_argument(
        "--first-gear", type=float, default=4.0, help="Transmission first gear ratio (default: 4.0)"
    )
    compare_parser.add_argument(
        "--use",
        default=IntendedUse.WEEKEND_TRAIL.value,
        help="Intended use: " + ", ".join(u.value for u in IntendedUse) + " (default: weekend_trail)",
    )
    compare_parser.add_argument("--vehicle", default=None, help="Vehicle name, e.g. 'Toyota Tacoma'")
    compare_parser.add_argument(
        "--vehicle-weight", type=float, default=None, help="Curb weight in lbs (default: 4500)"
    )
    compare_parser.add_argument(
        "--suspension",
        default=None,
        help="Front suspension: ifs or solid_axle (default: from --vehicle, else ifs)",
    )
    compare_parser.add_argument("--lift", type=float, default=0.0, help="Current lift height in inches")
    compare_parser.add_argument(
        "--load", type=float, default=0.0, help="Expedition load in lbs (enables overland analysis)"
    )
    compare_parser.add_argument("--current-weight", type=float, default=None, help="Current tire weight (lbs)")
    compare_parser.add_argument("--new-weight", type=float, default=None, help="New tire weight (lbs)")
    compare_parser.add_argument("--current-load-index", type=int, default=None, help="Current tire load index")
    compare_parser.add_argument("--new-load-index", type=int, default=None, help="New tire load index")
    compare_parser.add_argument(
        "--regear",
        action="store_true",
        help="Include re-gear candidates (requires --axle-ratio)",
    )
    compare_parser.add_argument(
        "--budget",
        default=BudgetLevel.MID_RANGE.value,
        help="Upgrade path parts tier: budget, mid_range or premium (default: mid_range)",
    )
    compare_parser.add_argument(
        "--plan",
        default=PlanTimeline.PHASED.value,
        help="Upgrade path phasing: immediate, phased or eventual (default: phased)",
    )
    compare_parser.add_argument(
        "--output", "-o",
        type=Path,
        default=None,
        help="Path to save JSON output (prints to stdout if not specified)",
    )

    # parse command
    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a tire size and show its dimensions",
    )
    parse_parser.add_argument("size", help="Tire size, e.g. LT285/75R16")

    # clearance command
    clearance_parser = subparsers.add_parser(
        "clearance",
        help="Estimate rubbing probability for a tire change",
    )
    clearance_parser.add_argument("current", help="Current tire size")
    clearance_parser.add_argument("new", help="New tire size")
    clearance_parser.add_argument(
        "--suspension",
        default=SuspensionType.IFS.value,
        help="Front suspension: ifs or solid_axle (default: ifs)",
    )
    clearance_parser.add_argument("--lift", type=float, default=0.0, help="Current lift height in inches")

    return parser


def _emit(output_json: str, output: Optional[Path]) -> None:
    if output:
        with open(output, "w") as f:
            f.write(output_json)
        print(f"\nResults saved to {output}", file=sys.stderr)
    else:
        print(output_json)


def _request_from_args(args: argparse.Namespace) -> UpgradeRequest:
    """Build an UpgradeRequest from a JSON file or the command-line options."""
    if args.input:
        with open(args.input) as f:
            return UpgradeRequest(**json.load(f))

    if not args.current or not args.new:
        raise InvalidConfigError("compare needs CURRENT and NEW tire sizes, or --input")

    drivetrain = DrivetrainConfig.build(
        axle_gear_ratio=args.axle_ratio,
        transmission_top_gear_ratio=args.top_gear,
        transfer_case_low_ratio=args.tc_low,
        first_gear_ratio=args.first_gear,
    )
    try:
        intended_use = IntendedUse(args.use)
    except ValueError as e:
        raise InvalidConfigError(f"Unknown intended use: {args.use!r}") from e

    return UpgradeRequest(
        vehicle=args.vehicle,
        current_tire=args.current,
        new_tire=args.new,
        drivetrain=drivetrain,
        tire_specs=TireSpecOverrides(
            current_tire_weight_lbs=args.current_weight,
            new_tire_weight_lbs=args.new_weight,
            current_load_index=args.current_load_index,
            new_load_index=args.new_load_index,
        ),
        intended_use=intended_use,
        vehicle_weight_lbs=args.vehicle_weight,
        suspension_type=args.suspension,
        lift_height_in=args.lift,
        expedition_load_lbs=args.load,
        include_regear=args.regear,
        budget_level=args.budget,
        plan_timeline=args.plan,
    )


def cmd_make_example(args: argparse.Namespace) -> int:
    """Generate an example request JSON file."""
    example = UpgradeRequest(
        vehicle="Toyota Tacoma",
        current_tire="265/70R16",
        new_tire="285/75R17",
        drivetrain=DrivetrainConfig(
            axle_gear_ratio=3.909,
            transmission_top_gear_ratio=0.85,
            transfer_case_low_ratio=2.566,
            first_gear_ratio=3.52,
        ),
        tire_specs=TireSpecOverrides(
            current_tire_weight_lbs=44.0,
            new_tire_weight_lbs=60.0,
            current_load_index=112,
            new_load_index=121,
        ),
        intended_use=IntendedUse.OVERLANDING,
        vehicle_weight_lbs=4500.0,
        lift_height_in=2.0,
        expedition_load_lbs=600.0,
        include_regear=True,
    )

    output_json = example.model_dump_json(indent=2)

    with open(args.output, "w") as f:
        f.write(output_json)

    print(f"Created example request file: {args.output}")
    print("\nRun comparison with:")
    print(f"  python -m tirecalc compare --input {args.output}")

    return 0


def cmd_compare(args: argparse.Namespace) -> int:
    """Compare two tires and report every applicable analysis."""
    try:
        request = _request_from_args(args)

        print("\nTire Upgrade Calculator", file=sys.stderr)
        print(f"{request.current_tire} -> {request.new_tire} ({request.intended_use.value})", file=sys.stderr)
        logger.info("Running comparison for %s", request.vehicle or "generic vehicle")

        report = build_report(request)
        _emit(report.model_dump_json(indent=2), args.output)
        print_readable_summary(report)
        return 0

    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in {args.input}: {e}", file=sys.stderr)
        return 1
    except ParseError as e:
        print(f"Parse Error: {e}", file=sys.stderr)
        return 1
    except (InvalidConfigError, ValueError) as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_parse(args: argparse.Namespace) -> int:
    """Parse a tire size and print its dimensions."""
    try:
        metrics = tire_metrics(parse_tire_size(args.size))
    except ParseError as e:
        print(f"Parse Error: {e}", file=sys.stderr)
        return 1

    print(metrics.model_dump_json(indent=2))
    tire = metrics.tire
    print(
        f"\n{tire.display}: {tire.diameter_in:.2f}in diameter ({tire.diameter_source.value}), "
        f"{tire.section_width_in:.2f}in wide, {metrics.revolutions_per_mile:.0f} rev/mile",
        file=sys.stderr,
    )
    return 0


def cmd_clearance(args: argparse.Namespace) -> int:
    """Estimate rubbing probability for a tire change."""
    try:
        comparison = ComparisonEngine().compare(args.current, args.new)
        estimate = estimate_from_comparison(comparison, args.suspension, args.lift)
    except ParseError as e:
        print(f"Parse Error: {e}", file=sys.stderr)
        return 1
    except InvalidConfigError as e:
        print(f"Validation Error: {e}", file=sys.stderr)
        return 1

    print(estimate.model_dump_json(indent=2))
    print(f"\n{estimate.summary}", file=sys.stderr)
    return 0


def cli(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level or get_settings().log_level)

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "make-example": cmd_make_example,
        "compare": cmd_compare,
        "parse": cmd_parse,
        "clearance": cmd_clearance,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


def main():
    """Console script entrypoint wrapper."""
    return cli()


if __name__ == "__main__":
    sys.exit(cli())

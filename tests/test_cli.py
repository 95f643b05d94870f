"""
Tests for the command-line interface.
"""

import io
import json

import pytest

from tirecalc.cli.main import cli, create_parser
from tirecalc.cli.readable_output import print_readable_summary
from tirecalc.models.inputs import UpgradeRequest
from tirecalc.report import build_report

QUIET = ["--log-level", "ERROR"]


class TestParser:
    """Tests for argument parsing."""

    def test_compare_defaults(self):
        """Test compare option defaults."""
        args = create_parser().parse_args(["compare", "265/70R17", "285/75R17"])

        assert args.axle_ratio is None
        assert args.top_gear == 1.0
        assert args.tc_low == 2.5
        assert args.first_gear == 4.0
        assert args.use == "weekend_trail"
        assert not args.regear

    def test_version(self, capsys):
        """Test --version exits cleanly."""
        with pytest.raises(SystemExit) as exc_info:
            cli(["--version"])

        assert exc_info.value.code == 0
        assert "tirecalc" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        """Test running without a command prints help."""
        assert cli(QUIET) == 0
        assert "usage" in capsys.readouterr().out.lower()


class TestParseCommand:
    """Tests for the parse command."""

    def test_parse(self, capsys):
        """Test parsing a flotation size."""
        assert cli(QUIET + ["parse", "35x12.50R17"]) == 0

        metrics = json.loads(capsys.readouterr().out)
        assert metrics["tire"]["diameter_in"] == 35.0
        assert metrics["tire"]["format"] == "Flotation"

    def test_parse_error(self, capsys):
        """Test a bad size returns 1."""
        assert cli(QUIET + ["parse", "not-a-tire"]) == 1
        assert "Parse Error" in capsys.readouterr().err


class TestCompareCommand:
    """Tests for the compare command."""

    def test_compare(self, capsys):
        """Test a comparison with gearing prints the report JSON."""
        code = cli(QUIET + ["compare", "265/70R17", "285/75R17", "--axle-ratio", "3.909", "--top-gear", "0.85"])

        captured = capsys.readouterr()
        assert code == 0
        report = json.loads(captured.out)
        assert report["comparison"]["drivetrain_impact"]["rpm"]["new"] == pytest.approx(2212.4, abs=0.5)
        assert report["drivetrain_stress"]["score"] == 30
        assert "Summary: 265/70R17 -> 285/75R17" in captured.err

    def test_compare_without_gearing(self, capsys):
        """Test drivetrain outputs are null without an axle ratio."""
        assert cli(QUIET + ["compare", "265/70R17", "285/75R17"]) == 0

        report = json.loads(capsys.readouterr().out)
        assert report["comparison"]["drivetrain_impact"] is None
        assert report["drivetrain_stress"] is None

    def test_compare_to_file(self, tmp_path, capsys):
        """Test --output writes the report to a file."""
        output = tmp_path / "report.json"

        assert cli(QUIET + ["compare", "265/70R17", "285/75R17", "--output", str(output)]) == 0

        assert capsys.readouterr().out == ""
        report = json.loads(output.read_text())
        assert report["comparison"]["new"]["display"] == "285/75R17"

    def test_compare_overland(self, capsys):
        """Test the expedition load and suspension options."""
        code = cli(QUIET + [
            "compare", "265/70R17", "285/75R17",
            "--axle-ratio", "3.909",
            "--use", "overland",
            "--suspension", "solid_axle",
            "--load", "1000",
        ])

        assert code == 0
        report = json.loads(capsys.readouterr().out)
        assert report["comparison"]["intended_use"] == "overlanding"
        assert report["clearance_estimate"]["suspension_type"] == "solid_axle"
        assert report["overland"]["load_category"]["category"] == "HEAVY"

    def test_compare_upgrade_plan(self, capsys):
        """Test the budget and plan options reach the upgrade path."""
        code = cli(QUIET + ["compare", "265/70R17", "285/75R17", "--budget", "budget", "--plan", "immediate"])

        captured = capsys.readouterr()
        assert code == 0
        path = json.loads(captured.out)["upgrade_path"]
        assert path["budget_level"] == "budget"
        assert path["schedule"]["phases"][0]["phase"] == "Before First Drive"
        assert "Upgrade path (budget): 2 upgrades, 0 essential" in captured.err

    def test_missing_sizes(self, capsys):
        """Test compare without sizes or --input fails."""
        assert cli(QUIET + ["compare"]) == 1
        assert "Validation Error" in capsys.readouterr().err

    def test_bad_size(self, capsys):
        """Test an unparseable size returns 1."""
        assert cli(QUIET + ["compare", "garbage", "285/75R17"]) == 1
        assert "Parse Error" in capsys.readouterr().err

    @pytest.mark.parametrize(
        "option,value",
        [
            ("--axle-ratio", "0"),
            ("--use", "mall_crawler"),
            ("--lift", "-2"),
            ("--budget", "luxury"),
            ("--plan", "someday"),
        ],
    )
    def test_invalid_options(self, option, value, capsys):
        """Test invalid numeric and enum options return 1."""
        assert cli(QUIET + ["compare", "265/70R17", "285/75R17", option, value]) == 1
        assert "Validation Error" in capsys.readouterr().err

    def test_invalid_json_input(self, tmp_path, capsys):
        """Test malformed request files return 1."""
        path = tmp_path / "request.json"
        path.write_text("{not json")

        assert cli(QUIET + ["compare", "--input", str(path)]) == 1
        assert "Invalid JSON" in capsys.readouterr().err

    def test_missing_input_file(self, tmp_path, capsys):
        """Test a missing request file returns 1."""
        assert cli(QUIET + ["compare", "--input", str(tmp_path / "missing.json")]) == 1


class TestMakeExample:
    """Tests for make-example and compare --input."""

    def test_make_example_round_trip(self, tmp_path, capsys):
        """Test the generated example runs through compare."""
        path = tmp_path / "example.json"

        assert cli(QUIET + ["make-example", "--output", str(path)]) == 0
        assert path.exists()
        capsys.readouterr()

        assert cli(QUIET + ["compare", "--input", str(path)]) == 0
        report = json.loads(capsys.readouterr().out)
        assert report["vehicle"] == "Toyota Tacoma"
        assert report["regear"]["candidates"]
        assert report["comparison"]["load_capacity_analysis"]["new_load_index"] == 121
        assert len(report["community_builds"]) == 2


class TestClearanceCommand:
    """Tests for the clearance command."""

    def test_clearance(self, capsys):
        """Test the clearance estimate for a stock IFS truck."""
        assert cli(QUIET + ["clearance", "265/70R17", "285/75R17"]) == 0

        estimate = json.loads(capsys.readouterr().out)
        assert estimate["probability"] == 45
        assert estimate["risk_class"] == "MODERATE"

    def test_clearance_with_lift(self, capsys):
        """Test a lift lowers the estimate."""
        assert cli(QUIET + ["clearance", "265/70R17", "285/75R17", "--lift", "2"]) == 0

        estimate = json.loads(capsys.readouterr().out)
        assert estimate["probability"] == 15


class TestReadableSummary:
    """Tests for the readable summary."""

    @pytest.fixture
    def report(self, reference):
        """Provide a report with gearing."""
        request = UpgradeRequest(
            current_tire="265/70R17",
            new_tire="285/75R17",
            drivetrain={"axle_gear_ratio": 3.909},
        )
        return build_report(request, reference)

    def test_writes_to_current_stderr(self, report, capsys):
        """Test the default stream follows sys.stderr redirection."""
        print_readable_summary(report)

        captured = capsys.readouterr()
        assert "Summary: 265/70R17 -> 285/75R17" in captured.err
        assert captured.out == ""

    def test_explicit_stream(self, report):
        """Test an explicit stream receives the summary."""
        stream = io.StringIO()

        print_readable_summary(report, stream)

        assert "Summary: 265/70R17 -> 285/75R17" in stream.getvalue()

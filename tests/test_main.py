"""Tests for the command line entry point."""

import json
import os
import subprocess
import sys
from pathlib import Path

from homestay_booking.main import main

PROJECT_ROOT = Path(__file__).parent.parent


def parse_output(out):
    # main() called in-process logs through structlog's default stdout printer
    return json.loads(out[out.index('{\n  "success"'):])


def run_cli(args, **env):
    """Run the console script entry point in a fresh interpreter."""
    return subprocess.run(
        [sys.executable, "-c", "from homestay_booking.main import cli; cli()", *args],
        cwd=PROJECT_ROOT,
        env={**os.environ, **env},
        capture_output=True,
        text=True,
        check=False,
    )


def test_main_proposes_and_quotes(availability_response_path, capsys):
    """Test a full run with the proposal applied."""
    exit_code = main([
        str(availability_response_path),
        "--slug", "mountain-view-homestay",
        "--guests", "2A0C,1A1C",
        "--check-in", "2026-11-02",
        "--check-out", "2026-11-05",
        "--apply-proposal",
    ])

    result = parse_output(capsys.readouterr().out)
    assert exit_code == 0
    assert result["success"] is True
    assert result["nights"] == 3
    assert [a["room_id"] for a in result["proposal"]["assignments"]] == [101, 102]
    assert len(result["rooms"]) == 4
    assert result["rejections"] == []
    assert result["snapshot"]["quote"]["grand_total"] == 16500


def test_main_without_applying_proposal(availability_response_path, capsys):
    """Test the cart stays empty unless the proposal is applied."""
    exit_code = main([
        str(availability_response_path),
        "--slug", "lakeside-retreat",
        "--guests", "2A0C",
    ])

    result = parse_output(capsys.readouterr().out)
    assert exit_code == 0
    assert result["snapshot"]["entries"] == []
    assert result["snapshot"]["checkout_valid"] is False


def test_main_unknown_slug(availability_response_path, capsys):
    """Test a missing homestay exits with an error."""
    exit_code = main([str(availability_response_path), "--slug", "nowhere", "--guests", "1A0C"])

    assert exit_code == 1
    assert '"success": false' in capsys.readouterr().out


def test_main_bad_guests(availability_response_path, capsys):
    """Test malformed guests exit with an error."""
    exit_code = main([str(availability_response_path), "--slug", "lakeside-retreat", "--guests", "lots"])

    assert exit_code == 1
    assert "Malformed guest token" in capsys.readouterr().out


def test_cli_stdout_is_only_the_json_result(availability_response_path):
    """Test the console script keeps log lines off stdout."""
    completed = run_cli(
        [str(availability_response_path), "--slug", "lakeside-retreat", "--guests", "2A0C"],
        LOG_LEVEL="INFO",
        LOG_FORMAT="console",
    )

    assert completed.returncode == 0
    result = json.loads(completed.stdout)
    assert result["success"] is True
    assert result["homestay"] == "lakeside-retreat"
    assert "Starting room proposal" in completed.stderr


def test_cli_honours_log_level(availability_response_path):
    """Test LOG_LEVEL from the environment filters the console script's logs."""
    completed = run_cli(
        [str(availability_response_path), "--slug", "lakeside-retreat", "--guests", "2A0C"],
        LOG_LEVEL="ERROR",
        LOG_FORMAT="console",
    )

    assert completed.returncode == 0
    assert json.loads(completed.stdout)["success"] is True
    assert "Starting room proposal" not in completed.stderr


def test_cli_error_exit_code(availability_response_path):
    """Test the console script exits 1 with a JSON error on bad input."""
    completed = run_cli(
        [str(availability_response_path), "--slug", "nowhere", "--guests", "1A0C"],
        LOG_LEVEL="INFO",
        LOG_FORMAT="json",
    )

    assert completed.returncode == 1
    assert json.loads(completed.stdout)["success"] is False
    assert "Room proposal failed" in completed.stderr

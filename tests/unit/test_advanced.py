"""Unit tests for the Pluto integration.

Subprocess calls are mocked; one optional test runs a real Pluto scan
when the binary is installed.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from kubedepscan.advanced import PLUTO_INSTALL_HINT, AdvancedScanOutcome, PlutoScanner


# =============================================================================
# Availability
# =============================================================================


def test_pluto_missing_binary_is_unavailable() -> None:
    with patch("kubedepscan.advanced.shutil.which", return_value=None):
        scanner = PlutoScanner()

    assert scanner.available is False
    assert scanner.name == "Pluto"
    assert scanner.install_hint == PLUTO_INSTALL_HINT


def test_pluto_missing_binary_detect_fails(tmp_path: Path) -> None:
    with patch("kubedepscan.advanced.shutil.which", return_value=None):
        scanner = PlutoScanner()

    outcome = scanner.detect(tmp_path)

    assert outcome.passed is False
    assert outcome.error is not None
    assert "Pluto" in outcome.error


def test_custom_binary_name_is_looked_up() -> None:
    with patch("kubedepscan.advanced.shutil.which", return_value="/opt/bin/pluto-v5") as which:
        scanner = PlutoScanner("pluto-v5")

    which.assert_called_once_with("pluto-v5")
    assert scanner.available is True


# =============================================================================
# Mocked subprocess
# =============================================================================


def test_pluto_clean_run_passes(tmp_path: Path) -> None:
    completed = MagicMock(returncode=0, stdout="There were no resources found with known deprecated apiVersions.\n", stderr="")

    with (
        patch("kubedepscan.advanced.shutil.which", return_value="/usr/local/bin/pluto"),
        patch("kubedepscan.advanced.subprocess.run", return_value=completed) as run,
    ):
        scanner = PlutoScanner(timeout_seconds=7)
        outcome = scanner.detect(tmp_path)

    assert outcome == AdvancedScanOutcome(
        passed=True,
        output="There were no resources found with known deprecated apiVersions.\n",
        exit_code=0,
        error=None,
    )
    cmd = run.call_args.args[0]
    assert cmd == [
        "/usr/local/bin/pluto",
        "detect-files",
        "-d",
        str(tmp_path),
        "--ignore-deprecations=false",
        "--ignore-removals=false",
    ]
    assert run.call_args.kwargs["timeout"] == 7
    assert run.call_args.kwargs["check"] is False


def test_pluto_nonzero_exit_fails_with_verbatim_output(tmp_path: Path) -> None:
    table = (
        "NAME   KIND         VERSION              REPLACEMENT   REMOVED   DEPRECATED\n"
        "web    Deployment   extensions/v1beta1   apps/v1       true      true\n"
    )
    completed = MagicMock(returncode=3, stdout=table, stderr="")

    with (
        patch("kubedepscan.advanced.shutil.which", return_value="/usr/local/bin/pluto"),
        patch("kubedepscan.advanced.subprocess.run", return_value=completed),
    ):
        outcome = PlutoScanner().detect(tmp_path)

    assert outcome.passed is False
    assert outcome.output == table
    assert outcome.exit_code == 3


def test_pluto_timeout_fails(tmp_path: Path) -> None:
    with (
        patch("kubedepscan.advanced.shutil.which", return_value="/usr/local/bin/pluto"),
        patch(
            "kubedepscan.advanced.subprocess.run",
            side_effect=subprocess.TimeoutExpired("pluto", 5),
        ),
    ):
        outcome = PlutoScanner(timeout_seconds=5).detect(tmp_path)

    assert outcome.passed is False
    assert outcome.output == ""
    assert outcome.error == "Pluto scan timed out after 5s"


def test_pluto_exec_error_fails(tmp_path: Path) -> None:
    with (
        patch("kubedepscan.advanced.shutil.which", return_value="/usr/local/bin/pluto"),
        patch("kubedepscan.advanced.subprocess.run", side_effect=PermissionError("denied")),
    ):
        outcome = PlutoScanner().detect(tmp_path)

    assert outcome.passed is False
    assert outcome.error is not None
    assert "denied" in outcome.error


# =============================================================================
# Integration: real Pluto (skip if not in PATH)
# =============================================================================


@pytest.mark.skipif(not shutil.which("pluto"), reason="Pluto not in PATH")
def test_pluto_real_scan_of_empty_directory(tmp_path: Path) -> None:
    outcome = PlutoScanner(timeout_seconds=60).detect(tmp_path)

    assert outcome.exit_code is not None
    assert isinstance(outcome.output, str)

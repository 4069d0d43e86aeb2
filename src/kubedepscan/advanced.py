"""Optional external deprecation detector integration.

The scanner only depends on the ``AdvancedScanner`` protocol so that the
external tool can be stubbed in tests. ``PlutoScanner`` is the production
implementation wrapping the FairwindsOps Pluto CLI.

A detector run reports pass/fail only: any failure adds a single issue
to the scan total, however many deprecations the tool itself lists.
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from kubedepscan.observability.logging import get_logger


log = get_logger(__name__)

DEFAULT_PLUTO_TIMEOUT_SECONDS = 120
PLUTO_INSTALL_HINT = "brew install FairwindsOps/tap/pluto"


@dataclass(frozen=True)
class AdvancedScanOutcome:
    """Result of one external detector run."""

    passed: bool
    output: str
    exit_code: int | None = None
    error: str | None = None


class AdvancedScanner(Protocol):
    """Capability: run an external deprecation detector over a root."""

    name: str
    install_hint: str

    @property
    def available(self) -> bool: ...

    def detect(self, root: Path) -> AdvancedScanOutcome: ...


class PlutoScanner:
    """Synchronous wrapper around ``pluto detect-files``."""

    name = "Pluto"
    install_hint = PLUTO_INSTALL_HINT

    def __init__(
        self,
        binary: str = "pluto",
        *,
        timeout_seconds: int = DEFAULT_PLUTO_TIMEOUT_SECONDS,
    ) -> None:
        self._pluto_path = shutil.which(binary)
        self._timeout = timeout_seconds

    @property
    def available(self) -> bool:
        return self._pluto_path is not None

    def detect(self, root: Path) -> AdvancedScanOutcome:
        """Run Pluto against ``root`` and return its stdout verbatim."""
        if not self._pluto_path:
            log.error("pluto_unavailable")
            return AdvancedScanOutcome(passed=False, output="", error="Pluto binary not found in PATH")

        cmd = [
            self._pluto_path,
            "detect-files",
            "-d",
            str(root),
            "--ignore-deprecations=false",
            "--ignore-removals=false",
        ]
        log.info("pluto_scan_started", root=str(root), timeout_seconds=self._timeout)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            log.warning("pluto_timeout", timeout_seconds=self._timeout)
            output = e.stdout.decode(errors="replace") if isinstance(e.stdout, bytes) else e.stdout
            return AdvancedScanOutcome(
                passed=False,
                output=output or "",
                error=f"Pluto scan timed out after {self._timeout}s",
            )
        except OSError as e:
            log.exception("pluto_execution_error")
            return AdvancedScanOutcome(passed=False, output="", error=f"Pluto execution error: {e}")

        passed = result.returncode == 0
        log.info("pluto_scan_completed", passed=passed, exit_code=result.returncode)
        return AdvancedScanOutcome(
            passed=passed,
            output=result.stdout,
            exit_code=result.returncode,
            error=None if passed else (result.stderr.strip() or None),
        )


__all__ = [
    "AdvancedScanOutcome",
    "AdvancedScanner",
    "PLUTO_INSTALL_HINT",
    "PlutoScanner",
]

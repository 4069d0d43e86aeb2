"""Rendering of scan results.

``ConsoleReport`` prints the human-readable, colourised report with Rich;
``render_json`` serialises the same ``ScanResult`` for pipelines.
"""

from __future__ import annotations

import json
from typing import TextIO

from rich.console import Console
from rich.text import Text

from kubedepscan.models import Finding, ScanResult, ScanSection, Severity
from kubedepscan.rules import RECOMMENDATIONS, REFERENCES


BANNER = "=== Kubernetes Deprecated API Scanner ==="
SECTION_RULE = "─" * 53
SUMMARY_TITLE = "Summary"
NO_ISSUES_MESSAGE = "No deprecated APIs found!"


def make_console(*, file: TextIO | None = None, no_color: bool = False) -> Console:
    """Console used for reports: no wrapping, no automatic highlighting."""
    return Console(
        file=file,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        emoji=False,
    )


class ConsoleReport:
    """Print a ``ScanResult`` section by section."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or make_console()

    def render(self, result: ScanResult) -> None:
        self.console.print(Text(BANNER, style="blue"))
        self.console.print()
        self._print_advanced_notice(result)

        for section in result.sections:
            self._print_section(section)

        self._print_summary(result)

    def _print_header(self, title: str) -> None:
        self.console.print()
        self.console.print(Text(f"▶ {title}", style="blue"))
        self.console.print(SECTION_RULE)

    def _print_advanced_notice(self, result: ScanResult) -> None:
        name = result.advanced_scanner or "Advanced scanner"
        if result.advanced_scanner_used:
            self.console.print(
                Text.assemble(("✓", "green"), f" {name} detected - will use for advanced scanning")
            )
            return
        if not result.advanced_scanner_enabled:
            self.console.print(Text.assemble(("ℹ", "yellow"), f" {name} disabled - using basic scanning"))
            return
        self.console.print(Text.assemble(("ℹ", "yellow"), f" {name} not found - using basic scanning"))
        if result.advanced_scanner_install_hint:
            self.console.print(Text(f"  Install for better results: {result.advanced_scanner_install_hint}"))

    def _print_section(self, section: ScanSection) -> None:
        self._print_header(section.title)

        if section.output is not None:
            # External tool output is shown as-is, never parsed for markup
            self.console.out(section.output, end="" if section.output.endswith("\n") else "\n")
            status = section.notes[-1] if section.notes else ""
            if section.extra_issues:
                self.console.print(Text.assemble(("⚠", "yellow"), f" {status}"))
            else:
                self.console.print(Text.assemble(("✓", "green"), f" {status}"))
            return

        for note in section.notes:
            self.console.print(Text(note))
        if section.notes and section.findings:
            self.console.print()

        for finding in section.findings:
            self._print_finding(finding)

    def _print_finding(self, finding: Finding) -> None:
        if finding.severity == Severity.ERROR:
            marker = Text("✗ ERROR", style="red")
        else:
            marker = Text("⚠ WARNING", style="yellow")
        self.console.print(Text.assemble(marker, f" {finding.location}"))
        self.console.print(Text(f"  {finding.message}"))
        self.console.print()

    def _print_summary(self, result: ScanResult) -> None:
        self._print_header(SUMMARY_TITLE)

        if result.passed:
            self.console.print(Text(f"✓ {NO_ISSUES_MESSAGE}", style="green"))
            self.console.print()
            return

        self.console.print(Text(f"Found {result.issues_found} potential issue(s)", style="yellow"))
        self.console.print()
        self.console.print(Text("Recommendations:", style="blue"))
        for number, recommendation in enumerate(RECOMMENDATIONS, start=1):
            self.console.print(Text(f"{number}. {recommendation}"))
        self.console.print()
        self.console.print(Text("Useful Resources:", style="blue"))
        for title, url in REFERENCES:
            self.console.print(Text(f"• {title}: {url}"))
        self.console.print()


def render_json(result: ScanResult) -> str:
    """Serialise a result, including the derived counts and exit code."""
    payload = result.model_dump(mode="json")
    payload["passed"] = result.passed
    payload["exit_code"] = result.exit_code
    payload["findings"] = [finding.model_dump(mode="json") for finding in result.findings]
    return json.dumps(payload, indent=2, ensure_ascii=False)


__all__ = ["BANNER", "ConsoleReport", "NO_ISSUES_MESSAGE", "make_console", "render_json"]

"""Pydantic models for scan findings and results.

A run produces one ``ScanResult`` made of ordered ``ScanSection`` entries,
one per report section. The issue count is derived from the sections
instead of being kept in a mutable counter.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


# Line number used when a finding applies to a whole file
FILE_LEVEL_LINE = 0


class Severity(str, Enum):
    """Severity of a finding, used for report styling."""

    ERROR = "ERROR"
    WARNING = "WARNING"


class Finding(BaseModel):
    """One suspected deprecated-API usage."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="File path relative to the scan root")
    line: int = Field(ge=0, description="1-based line number, 0 for file-level findings")
    severity: Severity
    message: str

    @property
    def location(self) -> str:
        return f"{self.path}:{self.line}"


class ScanSection(BaseModel):
    """Outcome of one scan phase, in report order."""

    title: str
    notes: list[str] = Field(default_factory=list, description="Informational lines")
    output: str | None = Field(default=None, description="Verbatim external tool output")
    findings: list[Finding] = Field(default_factory=list)
    extra_issues: int = Field(
        default=0,
        ge=0,
        description="Issues counted without a finding (failing external detector)",
    )

    @property
    def issue_count(self) -> int:
        return len(self.findings) + self.extra_issues


class ScanResult(BaseModel):
    """Complete, immutable-by-convention result of one scanner run."""

    root: str
    advanced_scanner: str | None = Field(default=None, description="External detector name")
    advanced_scanner_available: bool = False
    advanced_scanner_enabled: bool = True
    advanced_scanner_install_hint: str | None = None
    sections: list[ScanSection] = Field(default_factory=list)

    @property
    def advanced_scanner_used(self) -> bool:
        return self.advanced_scanner_enabled and self.advanced_scanner_available

    @property
    def findings(self) -> list[Finding]:
        return [finding for section in self.sections for finding in section.findings]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def issues_found(self) -> int:
        return sum(section.issue_count for section in self.sections)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def errors(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.ERROR)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def warnings(self) -> int:
        return sum(1 for f in self.findings if f.severity == Severity.WARNING)

    @property
    def passed(self) -> bool:
        return self.issues_found == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1

    def section(self, title: str) -> ScanSection | None:
        """Look up a section by its title."""
        for section in self.sections:
            if section.title == title:
                return section
        return None


__all__ = ["FILE_LEVEL_LINE", "Finding", "ScanResult", "ScanSection", "Severity"]

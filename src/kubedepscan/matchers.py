"""Line-oriented matching of rule tables against file contents.

Matching is textual: a manifest matches a rule when the whole
file has an ``apiVersion:`` line for the rule's API version and, checked
independently, a ``kind:`` line for its kind. Multi-document files can
therefore match across document boundaries.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from kubedepscan.discovery import relative_path
from kubedepscan.models import FILE_LEVEL_LINE, Finding, Severity
from kubedepscan.observability.logging import get_logger
from kubedepscan.rules import ImportRule, ManifestRule, UsageRule


log = get_logger(__name__)

# Captures the minor version of a v0.<minor>.<patch> module version
_MODULE_MINOR_RE = re.compile(r"v0\.(\d+)\.")


@dataclass(frozen=True)
class TextFile:
    """A scanned file split into lines."""

    path: str
    lines: tuple[str, ...]


@dataclass
class DependencyReport:
    """Result of reading the dependency manifest at the scan root."""

    manifest: str
    exists: bool
    dependency_lines: list[str] = field(default_factory=list)
    finding: Finding | None = None


def split_lines(content: str) -> list[str]:
    """Split on newlines only, dropping a trailing CR from each line.

    ``str.splitlines`` also breaks on form feeds and Unicode separators,
    which would shift reported line numbers.
    """
    lines = content.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_text_files(paths: Iterable[Path], root: Path) -> list[TextFile]:
    """Read files as text, skipping those that cannot be read."""
    files: list[TextFile] = []
    for path in paths:
        rel = relative_path(path, root)
        try:
            content = path.read_text(encoding="utf-8", errors="ignore")
        except OSError as e:
            log.warning("file_read_failed", path=rel, error=str(e))
            continue
        files.append(TextFile(path=rel, lines=tuple(split_lines(content))))
    return files


def first_match(lines: Sequence[str], pattern: re.Pattern[str]) -> int | None:
    """Return the 1-based number of the first line matching ``pattern``."""
    for number, line in enumerate(lines, start=1):
        if pattern.search(line):
            return number
    return None


def first_substring(lines: Sequence[str], needle: str) -> int | None:
    """Return the 1-based number of the first line containing ``needle``."""
    for number, line in enumerate(lines, start=1):
        if needle in line:
            return number
    return None


def match_manifest_rules(
    files: Sequence[TextFile],
    rules: Iterable[ManifestRule],
) -> list[Finding]:
    """Apply manifest rules, rule by rule, to every file.

    Each (rule, file) pair yields at most one ERROR finding, located at the
    first matching ``apiVersion`` line.
    """
    findings: list[Finding] = []
    for rule in rules:
        for file in files:
            line = first_match(file.lines, rule.api_version_pattern)
            if line is None:
                continue
            if first_match(file.lines, rule.kind_pattern) is None:
                continue
            log.info(
                "manifest_rule_matched",
                path=file.path,
                line=line,
                api_version=rule.api_version,
                kind=rule.kind,
            )
            findings.append(
                Finding(path=file.path, line=line, severity=Severity.ERROR, message=rule.message)
            )
    return findings


def match_import_rules(
    files: Sequence[TextFile],
    rules: Iterable[ImportRule],
) -> list[Finding]:
    """Flag Go files that import a deprecated API package."""
    findings: list[Finding] = []
    for rule in rules:
        for file in files:
            line = first_substring(file.lines, rule.needle)
            if line is None:
                continue
            log.info("import_rule_matched", path=file.path, line=line, import_path=rule.import_path)
            findings.append(
                Finding(path=file.path, line=line, severity=Severity.WARNING, message=rule.message)
            )
    return findings


def match_usage_rules(
    files: Sequence[TextFile],
    rules: Iterable[UsageRule],
) -> list[Finding]:
    """Flag Go files calling deprecated scheme or client APIs."""
    findings: list[Finding] = []
    for rule in rules:
        for file in files:
            line = first_match(file.lines, rule.compiled)
            if line is None:
                continue
            log.info("usage_rule_matched", path=file.path, line=line, pattern=rule.pattern)
            findings.append(
                Finding(path=file.path, line=line, severity=Severity.WARNING, message=rule.message)
            )
    return findings


def is_outdated_dependency(line: str, namespace: str, min_minor: int) -> bool:
    """True when ``line`` pins a ``namespace`` module below ``v0.<min_minor>.0``."""
    start = line.find(namespace)
    if start < 0:
        return False
    return any(
        int(match.group(1)) < min_minor
        for match in _MODULE_MINOR_RE.finditer(line, start + len(namespace))
    )


def check_dependency_manifest(
    root: Path,
    *,
    manifest: str,
    namespace: str,
    min_minor: int,
) -> DependencyReport:
    """Read the dependency manifest and look for very old ``namespace`` modules.

    Comment lines are ignored. At most one file-level ERROR finding is
    produced, however many modules are outdated.
    """
    path = root / manifest
    if not path.is_file():
        return DependencyReport(manifest=manifest, exists=False)

    try:
        content = path.read_text(encoding="utf-8", errors="ignore")
    except OSError as e:
        log.warning("file_read_failed", path=manifest, error=str(e))
        return DependencyReport(manifest=manifest, exists=True)

    dependency_lines = [
        line
        for line in split_lines(content)
        if namespace in line and not line.lstrip().startswith("//")
    ]
    report = DependencyReport(manifest=manifest, exists=True, dependency_lines=dependency_lines)

    if any(is_outdated_dependency(line, namespace, min_minor) for line in dependency_lines):
        log.info("outdated_dependencies_detected", manifest=manifest, min_minor=min_minor)
        report.finding = Finding(
            path=manifest,
            line=FILE_LEVEL_LINE,
            severity=Severity.ERROR,
            message=(
                f"Very old Kubernetes dependencies detected (< v0.{min_minor}.0). "
                "Consider upgrading."
            ),
        )
    return report


__all__ = [
    "DependencyReport",
    "TextFile",
    "check_dependency_manifest",
    "first_match",
    "first_substring",
    "is_outdated_dependency",
    "load_text_files",
    "match_import_rules",
    "match_manifest_rules",
    "match_usage_rules",
    "split_lines",
]

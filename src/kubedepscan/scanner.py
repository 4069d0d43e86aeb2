"""Deprecated Kubernetes API scanner.

Runs the scan phases in a fixed order and collects their outcome into a
``ScanResult``:

1. YAML/JSON manifests against ``MANIFEST_RULES``
2. Optional external detector (Pluto)
3. Go sources against ``IMPORT_RULES``
4. Go sources against ``USAGE_RULES``
5. ``go.mod`` dependency versions

Nothing is printed here; rendering lives in ``kubedepscan.report``.
"""

from __future__ import annotations

from pathlib import Path

from kubedepscan.advanced import AdvancedScanner, PlutoScanner
from kubedepscan.config.settings import Settings, get_settings
from kubedepscan.discovery import find_files
from kubedepscan.errors import ScanConfigurationError
from kubedepscan.matchers import (
    TextFile,
    check_dependency_manifest,
    load_text_files,
    match_import_rules,
    match_manifest_rules,
    match_usage_rules,
)
from kubedepscan.models import ScanResult, ScanSection
from kubedepscan.observability.logging import LogContext, get_logger
from kubedepscan.rules import (
    IMPORT_RULES,
    MANIFEST_RULES,
    USAGE_RULES,
    ImportRule,
    ManifestRule,
    UsageRule,
)


log = get_logger(__name__)

MANIFEST_SECTION = "Scanning YAML/JSON Manifests"
IMPORT_SECTION = "Scanning Go Code for Deprecated Imports"
USAGE_SECTION = "Scanning Go Code for Deprecated API Usage"
DEPENDENCY_SECTION = "Checking go.mod for K8s Dependencies"


class DeprecatedApiScanner:
    """Scan a project tree for deprecated Kubernetes API usage."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        advanced_scanner: AdvancedScanner | None = None,
        use_advanced_scanner: bool | None = None,
        manifest_rules: tuple[ManifestRule, ...] = MANIFEST_RULES,
        import_rules: tuple[ImportRule, ...] = IMPORT_RULES,
        usage_rules: tuple[UsageRule, ...] = USAGE_RULES,
    ) -> None:
        self.settings = settings or get_settings()
        if advanced_scanner is None:
            advanced_scanner = PlutoScanner(
                self.settings.pluto.binary,
                timeout_seconds=self.settings.pluto.timeout_seconds,
            )
        self.advanced_scanner = advanced_scanner
        self.use_advanced_scanner = (
            self.settings.pluto.enabled if use_advanced_scanner is None else use_advanced_scanner
        )
        self.manifest_rules = manifest_rules
        self.import_rules = import_rules
        self.usage_rules = usage_rules

    def scan(self, root: str | Path = ".") -> ScanResult:
        """Scan ``root`` and return the collected result.

        Raises:
            ScanConfigurationError: ``root`` does not exist or is not a directory.
        """
        root_path = Path(root)
        if not root_path.is_dir():
            raise ScanConfigurationError(
                code="invalid_scan_root",
                message=f"Scan root must be an existing directory: {root_path}",
                details={"root": str(root_path)},
            )

        with LogContext(root=str(root_path)):
            log.info("scan_started")
            advanced_available = self.advanced_scanner.available

            sections = [self._scan_manifests(root_path)]
            if self.use_advanced_scanner and advanced_available:
                sections.append(self._run_advanced_scan(root_path))

            source_files = load_text_files(
                find_files(
                    root_path,
                    extensions=self.settings.scan.source_extensions,
                    excluded_dirs=self.settings.scan.source_excluded_dirs,
                ),
                root_path,
            )
            sections.append(self._scan_imports(source_files))
            sections.append(self._scan_usage(source_files))
            sections.append(self._check_dependencies(root_path))

            result = ScanResult(
                root=str(root_path),
                advanced_scanner=self.advanced_scanner.name,
                advanced_scanner_available=advanced_available,
                advanced_scanner_enabled=self.use_advanced_scanner,
                advanced_scanner_install_hint=self.advanced_scanner.install_hint,
                sections=sections,
            )
            log.info(
                "scan_completed",
                issues_found=result.issues_found,
                errors=result.errors,
                warnings=result.warnings,
            )
        return result

    def _scan_manifests(self, root: Path) -> ScanSection:
        section = ScanSection(title=MANIFEST_SECTION)
        files = load_text_files(
            find_files(
                root,
                extensions=self.settings.scan.manifest_extensions,
                excluded_dirs=self.settings.scan.manifest_excluded_dirs,
            ),
            root,
        )
        if not files:
            section.notes.append("No manifest files found")
            return section
        section.findings = match_manifest_rules(files, self.manifest_rules)
        return section

    def _run_advanced_scan(self, root: Path) -> ScanSection:
        name = self.advanced_scanner.name
        section = ScanSection(title=f"Running {name} Advanced Scan")
        outcome = self.advanced_scanner.detect(root)
        section.output = outcome.output
        if outcome.passed:
            section.notes.append(f"{name} scan complete")
        else:
            section.notes.append(f"{name} found deprecated APIs (see output above)")
            # One issue for the whole tool run, not one per tool finding
            section.extra_issues = 1
        return section

    def _scan_imports(self, files: list[TextFile]) -> ScanSection:
        section = ScanSection(title=IMPORT_SECTION)
        if not files:
            section.notes.append("No Go files found")
            return section
        section.findings = match_import_rules(files, self.import_rules)
        return section

    def _scan_usage(self, files: list[TextFile]) -> ScanSection:
        section = ScanSection(title=USAGE_SECTION)
        if files:
            section.findings = match_usage_rules(files, self.usage_rules)
        return section

    def _check_dependencies(self, root: Path) -> ScanSection:
        scan_settings = self.settings.scan
        section = ScanSection(title=f"Checking {scan_settings.dependency_manifest} for K8s Dependencies")
        report = check_dependency_manifest(
            root,
            manifest=scan_settings.dependency_manifest,
            namespace=scan_settings.dependency_namespace,
            min_minor=scan_settings.min_kubernetes_minor,
        )
        if not report.exists:
            section.notes.append(f"No {report.manifest} found")
            return section

        section.notes.append("Current Kubernetes dependencies:")
        if report.dependency_lines:
            section.notes.extend(report.dependency_lines)
        else:
            section.notes.append(f"  No {scan_settings.dependency_namespace} dependencies found")
        if report.finding is not None:
            section.findings.append(report.finding)
        return section


def scan(root: str | Path = ".", **kwargs) -> ScanResult:
    """Convenience wrapper: scan ``root`` with a default-configured scanner."""
    return DeprecatedApiScanner(**kwargs).scan(root)


__all__ = [
    "DEPENDENCY_SECTION",
    "DeprecatedApiScanner",
    "IMPORT_SECTION",
    "MANIFEST_SECTION",
    "USAGE_SECTION",
    "scan",
]

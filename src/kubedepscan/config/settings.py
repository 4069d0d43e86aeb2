"""kubedepscan settings configuration.

Uses Pydantic Settings for type-safe configuration management
with support for environment variables and .env files.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from kubedepscan.version import __version__


class ScanSettings(BaseSettings):
    """File discovery and heuristic thresholds."""

    model_config = SettingsConfigDict(
        env_prefix="KUBEDEPSCAN_SCAN_",
        extra="ignore",
    )

    manifest_extensions: list[str] = Field(
        default_factory=lambda: [".yaml", ".yml", ".json"],
        description="File suffixes treated as Kubernetes manifests",
    )
    manifest_excluded_dirs: list[str] = Field(
        default_factory=lambda: ["vendor", "node_modules", ".git", "testdata"],
        description="Directory names never descended into for manifests",
    )
    source_extensions: list[str] = Field(
        default_factory=lambda: [".go"],
        description="File suffixes treated as Go sources",
    )
    source_excluded_dirs: list[str] = Field(
        default_factory=lambda: ["vendor", ".git"],
        description="Directory names never descended into for sources",
    )
    dependency_manifest: str = Field(
        default="go.mod",
        description="Dependency manifest read from the scan root",
    )
    dependency_namespace: str = Field(
        default="k8s.io",
        description="Module namespace whose versions are checked",
    )
    min_kubernetes_minor: int = Field(
        default=20,
        ge=0,
        description="Dependencies below v0.<minor>.0 are reported as very old",
    )

    @field_validator("manifest_extensions", "source_extensions", mode="after")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        """Lower-case suffixes and make sure they start with a dot."""
        normalized = []
        for ext in v:
            ext = ext.strip().lower()
            if not ext:
                continue
            normalized.append(ext if ext.startswith(".") else f".{ext}")
        if not normalized:
            msg = "At least one file extension is required"
            raise ValueError(msg)
        return normalized


class AdvancedScanSettings(BaseSettings):
    """External Pluto detector configuration."""

    model_config = SettingsConfigDict(
        env_prefix="KUBEDEPSCAN_PLUTO_",
        extra="ignore",
    )

    enabled: bool = Field(
        default=True,
        description="Run Pluto when it is found on PATH",
    )
    binary: str = Field(
        default="pluto",
        description="Pluto executable name or path",
    )
    timeout_seconds: int = Field(
        default=120,
        ge=1,
        description="Pluto run timeout in seconds",
    )


class ObservabilitySettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="KUBEDEPSCAN_OBSERVABILITY_",
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )
    log_format: Literal["json", "console"] = Field(
        default="console",
        description="Log output format",
    )


class Settings(BaseSettings):
    """Main kubedepscan configuration."""

    model_config = SettingsConfigDict(
        env_prefix="KUBEDEPSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    version: str = Field(default=__version__)

    # Nested settings
    scan: ScanSettings = Field(default_factory=ScanSettings)
    pluto: AdvancedScanSettings = Field(default_factory=AdvancedScanSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are cached after first load.

    Returns:
        Settings: The application settings instance.
    """
    return Settings()


def reload_settings() -> Settings:
    """Force reload settings (clears cache).

    Returns:
        Settings: Fresh settings instance.
    """
    get_settings.cache_clear()
    return get_settings()

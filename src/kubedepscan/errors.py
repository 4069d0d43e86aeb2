"""Structured errors raised by the scanner."""

from __future__ import annotations

import json
from typing import Any


class KubeDepScanError(RuntimeError):
    """Base class for invocation-level scanner failures."""

    def __init__(
        self,
        *,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for logs and JSON output."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def to_json(self) -> str:
        """Serialize the error as a compact JSON string."""
        return json.dumps(self.to_dict(), sort_keys=True, ensure_ascii=True)


class ScanConfigurationError(KubeDepScanError):
    """The scan root cannot be scanned (missing or not a directory)."""


__all__ = ["KubeDepScanError", "ScanConfigurationError"]

"""Pytest configuration and fixtures for kubedepscan tests."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from kubedepscan.advanced import AdvancedScanOutcome

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


# Never pick up a Pluto binary installed on the test machine
os.environ.setdefault("KUBEDEPSCAN_PLUTO_ENABLED", "false")


@pytest.fixture(autouse=True)
def reset_settings() -> Generator[None, None, None]:
    """Reset settings cache before each test."""
    from kubedepscan.config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@dataclass
class StubAdvancedScanner:
    """In-memory stand-in for the Pluto CLI."""

    available: bool = True
    passed: bool = True
    output: str = ""
    name: str = "Pluto"
    install_hint: str = "brew install FairwindsOps/tap/pluto"
    calls: list[Path] = field(default_factory=list)

    def detect(self, root: Path) -> AdvancedScanOutcome:
        self.calls.append(root)
        return AdvancedScanOutcome(
            passed=self.passed,
            output=self.output,
            exit_code=0 if self.passed else 3,
        )


@pytest.fixture
def stub_scanner() -> Callable[..., StubAdvancedScanner]:
    """Factory for external detector stubs (available and passing by default)."""

    def _make(**kwargs: object) -> StubAdvancedScanner:
        return StubAdvancedScanner(**kwargs)  # type: ignore[arg-type]

    return _make


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Write a project tree from a {relative path: content} mapping."""

    def _make(files: dict[str, str]) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return _make


"""Shared test fixtures for parammeta.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from parammeta.registry import OverlayRegistry
from parammeta.schema.nodes import ParamDef, ParamField


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "parammeta"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def registry() -> OverlayRegistry:
    """Return a fresh registry so loads never leak between tests."""
    return OverlayRegistry("test")


@pytest.fixture()
def make_def() -> Callable[..., ParamDef]:
    """Return a factory building a ``ParamDef`` from internal names."""

    def _make(*names: str, name: str = "TestParam") -> ParamDef:
        return ParamDef(name=name, fields=[ParamField(internal_name=n) for n in names])

    return _make


@pytest.fixture()
def write_document(tmp_path: Path) -> Callable[[str], Path]:
    """Return a helper that writes overlay document text to a temp file."""

    def _write(text: str, filename: str = "meta.xml") -> Path:
        path = tmp_path / filename
        path.write_text(text, encoding="utf-8")
        return path

    return _write

"""Smoke tests for package structure and basic contracts.

These tests run in pre-commit hooks to catch structural issues quickly.
"""

from __future__ import annotations

import importlib
import importlib.metadata
from pathlib import Path

import pytest


@pytest.mark.smoke
def test_package_metadata_accessible() -> None:
    """The distribution is installed under its index name."""
    version = importlib.metadata.version("madness-index")
    assert version


@pytest.mark.smoke
def test_src_directory_structure() -> None:
    project_root = Path(__file__).parent.parent.parent
    src_dir = project_root / "src" / "madness_index"
    assert src_dir.is_dir(), f"Package directory not found: {src_dir}"
    for sub in ("ingest", "scoring", "matchup", "cli", "utils"):
        assert (src_dir / sub / "__init__.py").exists(), f"Missing subpackage: {sub}"


@pytest.mark.smoke
@pytest.mark.parametrize(
    "module",
    [
        "madness_index",
        "madness_index.config",
        "madness_index.engine",
        "madness_index.errors",
        "madness_index.ingest",
        "madness_index.scoring",
        "madness_index.matchup",
        "madness_index.cli.main",
        "madness_index.utils",
    ],
)
def test_modules_import(module: str) -> None:
    assert importlib.import_module(module) is not None


@pytest.mark.smoke
def test_top_level_exports() -> None:
    import madness_index

    for name in madness_index.__all__:
        assert hasattr(madness_index, name), name


@pytest.mark.smoke
def test_error_hierarchy() -> None:
    from madness_index.errors import EmptyFieldError, EntrantNotFoundError, MadnessIndexError

    assert issubclass(EmptyFieldError, MadnessIndexError)
    assert issubclass(EmptyFieldError, ValueError)
    assert issubclass(EntrantNotFoundError, MadnessIndexError)
    assert issubclass(EntrantNotFoundError, KeyError)

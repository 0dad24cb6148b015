"""Pytest configuration and shared fixtures for bootmap tests."""

import sys
from pathlib import Path

import pytest

# Add package to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bootmap.core.writer import WriterConfigBuilder
from bootmap.runtime import loader
from tests.fixtures import LOAD_LOG, create_project, project_map
from tests.fixtures import handlers


# ============================================================================
# Runtime State
# ============================================================================


@pytest.fixture(autouse=True)
def clean_runtime():
    """Reset loader state and forget files loaded by path."""
    loader.reset()
    LOAD_LOG.clear()
    handlers.EVENTS.clear()
    yield
    loader.reset()
    for name in [n for n in sys.modules if n.startswith("_bootmap_file_")]:
        del sys.modules[name]


# ============================================================================
# Project Fixtures
# ============================================================================


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create a canonical temporary project root with sources and boot files."""
    return create_project(tmp_path)


@pytest.fixture
def autoload_map(project_root: Path) -> dict:
    """Absolute autoload map for the temporary project."""
    return project_map(project_root)


@pytest.fixture
def config_builder(project_root: Path, autoload_map: dict) -> WriterConfigBuilder:
    """Fully populated config builder (relative root, dev, no handler)."""
    return (
        WriterConfigBuilder()
        .root(project_root)
        .dev(True)
        .files([str(project_root / "setup_first.py"), str(project_root / "boot.py")])
        .autoload_map(autoload_map)
    )


@pytest.fixture
def load_artifact():
    """Load a generated module once, the way the shims do."""

    def _load(path: Path):
        return loader.require_file(str(path))

    return _load

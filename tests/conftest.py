"""
Shared pytest configuration and fixtures for json-env-overrides tests.

This file contains:
- Common fixtures for reading test data and building environments
- Markers for different test categories
"""

from pathlib import Path
import sys

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from json_env_overrides.extras import ExtrasRegistry  # noqa: E402

DATA_DIR = Path(__file__).parent / "data"

ROOT_PREFIX = "MyApp"


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Tests combining several sources end to end")


def pytest_collection_modifyitems(config, items):
    """Mark tests as unit tests unless they are already integration tests."""
    for item in items:
        if "integration" not in item.keywords:
            item.add_marker(pytest.mark.unit)


@pytest.fixture()
def data_dir():
    """Directory holding JSON/YAML test data."""
    return DATA_DIR


@pytest.fixture()
def read_test_json():
    """Read a test data file as text."""

    def _read(name):
        return (DATA_DIR / name).read_text(encoding="utf-8")

    return _read


@pytest.fixture()
def registry():
    """Fresh extras registry, isolated from the default one."""
    return ExtrasRegistry()

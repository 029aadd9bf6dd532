"""
Pytest configuration and shared fixtures for stencil tests.
"""

import sys
from pathlib import Path
from typing import Any

import pytest
import yaml

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from stencil_core.extensions.builtin import builtin_extensions  # noqa: E402
from stencil_core.registry import ExtensionRegistry  # noqa: E402


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def tests_dir() -> Path:
    """Return the tests directory."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def fixtures_dir(tests_dir: Path) -> Path:
    """Return the fixtures directory."""
    return tests_dir / "fixtures"


@pytest.fixture(scope="session")
def templates_dir(fixtures_dir: Path) -> Path:
    """Return the template fixtures directory."""
    return fixtures_dir / "templates"


@pytest.fixture(scope="session")
def button_template(templates_dir: Path) -> dict[str, Any]:
    """Load the button template fixture."""
    with (templates_dir / "button.yaml").open() as f:
        return yaml.safe_load(f)


# =============================================================================
# Registry Fixtures
# =============================================================================


@pytest.fixture
def registry() -> ExtensionRegistry:
    """Registry with every built-in extension registered."""
    registry = ExtensionRegistry()
    for extension in builtin_extensions():
        registry.register(extension)
    return registry


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "property: Property-based tests")
    config.addinivalue_line("markers", "integration: End-to-end rendering tests")
    config.addinivalue_line("markers", "slow: Slow tests")


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption("--run-slow", action="store_true", default=False, help="Run slow tests")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)

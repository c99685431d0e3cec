"""Test configuration."""

from pathlib import Path

import pytest
from pytest import Config

from pawprice.core.logging import configure_logging

pytest_plugins: list[str] = [
    "tests.fixtures.providers",
    "tests.fixtures.api",
]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    configure_logging(testing=True)
    config.addinivalue_line("markers", "integration: mark test as an integration test")

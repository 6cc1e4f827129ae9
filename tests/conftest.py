"""Test configuration."""

import os
from pathlib import Path
from typing import List

import pytest
from pytest import Config

# Keep a developer's environment from switching modes under the tests
os.environ["TESTING"] = "true"
for _name in ("DRY_RUN", "NAIS_CLUSTER_NAME", "REDIS_URL"):
    os.environ.pop(_name, None)

from announcer.core.logging import configure_logging  # noqa: E402

fixture = pytest.fixture


@fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


pytest_plugins: List[str] = [
    "tests.fixtures.api",
    "tests.fixtures.feeds",
]


def pytest_configure(config: Config) -> None:
    """Configure pytest.

    Args:
        config: Pytest configuration object
    """
    # Configure logging for test environment
    configure_logging(testing=True)
    config.addinivalue_line("markers", "integration: mark test as an integration test")

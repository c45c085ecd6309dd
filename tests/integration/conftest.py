"""Shared fixtures for integration tests."""

import os

import pytest

from laakhay.github.core import EngineConfig, ProcessDefaults

# Skip all integration tests unless RUN_LAAKHAY_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_LAAKHAY_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_LAAKHAY_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def live_defaults() -> ProcessDefaults:
    """Defaults using GITHUB_TOKEN when set, anonymous access otherwise."""
    defaults = ProcessDefaults()
    defaults.configure(
        access_token=os.environ.get("GITHUB_TOKEN"),
        config=EngineConfig(max_attempts=2, call_timeout=60.0, max_pages=5),
    )
    return defaults

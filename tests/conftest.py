"""Shared fixtures."""

import pytest

from fine_dust.adapters.app_context import ApplicationContext


@pytest.fixture(autouse=True)
def reset_shared_instances() -> None:
    """Reset the process-wide context before each test."""
    ApplicationContext.reset_instance()

"""Shared fixtures for integration tests."""

import os

import pytest

from restpager.config import PagerSettings


@pytest.fixture
def live_settings() -> PagerSettings:
    """Settings for the live API, read from RESTPAGER_* variables."""
    return PagerSettings()


@pytest.fixture
def live_resource() -> str:
    return os.environ.get("RESTPAGER_TEST_RESOURCE", "persons")

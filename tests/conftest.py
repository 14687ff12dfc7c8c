"""Pytest configuration for all tests."""

from typing import Generator

import pytest

from hooter import Hooter
from hooter.core.config import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Reload settings for every test so env patches take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def bus() -> Hooter:
    """Provide a fresh root bus."""
    return Hooter()

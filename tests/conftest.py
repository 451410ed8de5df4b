"""Shared fixtures for sun phase tests."""

from datetime import date
from unittest.mock import AsyncMock

import pytest

from sun_phase.config import Settings
from sun_phase.weather.models import SunPhaseTimes


@pytest.fixture
def settings():
    """Settings with only the required values set."""
    return Settings(
        redis_addr="localhost:6379",
        wu_key="test-key",
        wu_location="CA/San_Francisco",
    )


@pytest.fixture
def fixed_day():
    return date(2024, 3, 15)


@pytest.fixture
def redis_client():
    """Redis client mock backed by a dict, exposed as ``redis_client.store``."""
    store = {}
    client = AsyncMock()
    client.get.side_effect = lambda key: store.get(key)
    client.set.side_effect = lambda key, value, ex=None: store.__setitem__(key, value)
    client.ping.return_value = True
    client.store = store
    return client


@pytest.fixture
def sun_phase_times():
    return SunPhaseTimes(sunrise_h=7, sunrise_m=1, sunset_h=19, sunset_m=12)


@pytest.fixture
def astronomy_client(sun_phase_times):
    client = AsyncMock()
    client.get_sun_phase.return_value = sun_phase_times
    return client

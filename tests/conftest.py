# ABOUTME: Shared test fixtures for the weather proxy test suite.
# ABOUTME: Provides the Open-Meteo fixture payload as a pytest fixture.

import pytest

from tests.helpers import forecast_payload


@pytest.fixture
def payload() -> dict:
    return forecast_payload()

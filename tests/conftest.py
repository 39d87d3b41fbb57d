"""Shared fixtures for the outcome-log test suite."""

from __future__ import annotations

import logging

import pytest
import structlog
from hypothesis import HealthCheck, settings

from outcome_log.core.ids import UserId
from tests.helpers import RecordingBackend

# Hypothesis builds its unicode character tables on first use, which can
# trip the too_slow health check on a cold cache.
settings.register_profile("default", suppress_health_check=[HealthCheck.too_slow])
settings.load_profile("default")


# ---------------------------------------------------------------------------
# Backend
# ---------------------------------------------------------------------------

@pytest.fixture
def backend() -> RecordingBackend:
    """Return a fresh backend with every level enabled."""
    return RecordingBackend()


@pytest.fixture
def quiet_backend() -> RecordingBackend:
    """Return a backend with info and error disabled."""
    return RecordingBackend(info_enabled=False, error_enabled=False)


# ---------------------------------------------------------------------------
# Values
# ---------------------------------------------------------------------------

@pytest.fixture
def user_id() -> UserId:
    return UserId.of("8d1f0c2e-user")


# ---------------------------------------------------------------------------
# Stdlib / structlog
# ---------------------------------------------------------------------------

@pytest.fixture
def stdlib_logger() -> logging.Logger:
    """Return a stdlib logger that propagates to caplog."""
    return logging.getLogger("outcome_log.tests")


@pytest.fixture
def reset_structlog():
    """Restore structlog's default configuration after the test."""
    yield
    structlog.reset_defaults()

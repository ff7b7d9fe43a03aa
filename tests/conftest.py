"""Shared test fixtures for the flexconfig test suite."""

from __future__ import annotations

import pytest

from flexconfig.config import reset_configuration


@pytest.fixture(autouse=True)
def _fresh_configuration():
    """Every test starts and ends without a process-wide configuration handle."""
    reset_configuration()
    yield
    reset_configuration()

"""Pytest configuration for validknobs_validate tests."""

import os
import sys
from pathlib import Path

import pytest

# Add the package sources to path for testing
for src_path in (
    Path(__file__).parent.parent / "src",
    Path(__file__).parent.parent.parent / "common" / "src",
):
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))

from validknobs_validate.errors import InternalError  # noqa: E402
from validknobs_validate.settings import ValidationSettings, reset_settings  # noqa: E402


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test with default settings and no VALIDKNOBS_ environment."""
    for key in list(os.environ):
        if key.startswith(ValidationSettings.ENV_PREFIX):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def failing_lookup():
    """Validator standing in for a check whose backing service is down."""

    def validator(value):
        return InternalError("lookup", ConnectionError("service unavailable"))

    return validator


@pytest.fixture
def call_recorder():
    """Factory for validators that record every value they see."""

    def make(result=None):
        calls = []

        def validator(value):
            calls.append(value)
            return result

        validator.calls = calls
        return validator

    return make

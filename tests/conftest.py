"""Pytest configuration and fixtures."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Isolate environment variables for each test.

    Configuration is read from the environment, so one test's overrides
    must not leak into another.
    """
    original_env = os.environ.copy()
    monkeypatch.delenv("CITEKEY_PATTERN", raising=False)
    monkeypatch.delenv("CITEKEY_KEY_SUFFIX", raising=False)

    yield

    os.environ.clear()
    os.environ.update(original_env)

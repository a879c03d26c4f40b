"""Shared fixtures: isolate every test from the caller's RGSEARCH_* settings."""

import pytest

from rgsearch.config import CONFIG_ENV, ENV_PREFIX, Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Settings() reads the environment, so start every test without overrides."""
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    for name in Settings.model_fields:
        monkeypatch.delenv(f"{ENV_PREFIX}{name.upper()}", raising=False)

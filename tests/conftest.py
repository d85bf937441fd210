"""Shared fixtures for the talent scorer tests."""

from pathlib import Path

import pytest

from talent_scorer.config import reset_config


SAMPLE_DIR = Path(__file__).parent.parent / "sample-data"


@pytest.fixture(autouse=True)
def default_config(monkeypatch):
    """Every test starts from the default configuration."""
    monkeypatch.delenv("TALENT_SCORER_CONFIG", raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def sample_dir() -> Path:
    return SAMPLE_DIR

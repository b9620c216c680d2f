"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from grant_triage.catalog import load_schemes

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def catalog():
    """The sample Malta scheme catalog, in file order."""
    return load_schemes(str(FIXTURES / "schemes.json"))


@pytest.fixture
def submission_path() -> str:
    return str(FIXTURES / "submission.json")

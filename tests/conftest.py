"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from github_stats_viewer.config import Config
from github_stats_viewer.models.user import DateRange

from helpers import GRAPHQL_URL


@pytest.fixture
def test_config():
    """Create a test configuration."""
    return Config(
        github_token="test_token",
        github_graphql_url=GRAPHQL_URL,
    )


@pytest.fixture
def january():
    """The 2024-01-01 .. 2024-01-31 range."""
    return DateRange(from_date=date(2024, 1, 1), to_date=date(2024, 1, 31))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable Config.from_env reads."""
    for name in (
        "GITHUB_STATS_TOKEN",
        "GITHUB_TOKEN",
        "GITHUB_STATS_USERS",
        "GITHUB_USERS",
        "GITHUB_GRAPHQL_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.setattr("github_stats_viewer.config.load_dotenv", lambda **kwargs: False)
    return monkeypatch

"""Configuration management for GitHub Stats Viewer."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"


@dataclass(frozen=True)
class Config:
    """Application configuration.

    Built once at startup and handed to the workflow; nothing else in the
    package reads the environment.
    """

    github_token: str | None = None
    github_graphql_url: str = DEFAULT_GRAPHQL_URL

    # Comma-separated usernames tracked before any stats are fetched
    seed_users: str = ""

    # Seconds; None waits forever
    request_timeout: float | None = 30.0

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        # override=False ensures environment variables take precedence over .env
        load_dotenv(override=False)

        # Support both GITHUB_STATS_TOKEN (preferred) and GITHUB_TOKEN (fallback)
        token = os.getenv("GITHUB_STATS_TOKEN") or os.getenv("GITHUB_TOKEN")
        users = os.getenv("GITHUB_STATS_USERS") or os.getenv("GITHUB_USERS", "")

        return cls(
            github_token=token or None,
            github_graphql_url=os.getenv("GITHUB_GRAPHQL_URL", DEFAULT_GRAPHQL_URL),
            seed_users=users,
        )

    @property
    def is_authenticated(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)

    @property
    def seed_usernames(self) -> list[str]:
        """Seed list split into trimmed, non-empty usernames."""
        return parse_username_list(self.seed_users)


def parse_username_list(value: str | None) -> list[str]:
    """Split a comma-separated string into trimmed, non-empty usernames."""
    if not value:
        return []
    return [name.strip() for name in value.split(",") if name.strip()]

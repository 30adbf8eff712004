"""Tracked user and date range models."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator

from github_stats_viewer.models.contribution import ContributionStats


class UserStatus(str, Enum):
    """Where a tracked user sits in the fetch pipeline."""

    UNFETCHED = "unfetched"
    STATS = "stats"
    ERROR = "error"


class DateRange(BaseModel):
    """Calendar date window; either side may still be unset."""

    model_config = ConfigDict(frozen=True)

    from_date: date | None = None
    to_date: date | None = None

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if self.from_date and self.to_date and self.from_date > self.to_date:
            raise ValueError(
                f"from_date {self.from_date} is after to_date {self.to_date}"
            )
        return self

    @property
    def is_complete(self) -> bool:
        """True when both ends are set."""
        return self.from_date is not None and self.to_date is not None

    def to_graphql_window(self) -> tuple[str, str]:
        """ISO-8601 bounds covering both end days in full (UTC)."""
        if not self.is_complete:
            raise ValueError("Date range is incomplete")
        return (
            f"{self.from_date.isoformat()}T00:00:00Z",
            f"{self.to_date.isoformat()}T23:59:59Z",
        )

    def __str__(self) -> str:
        start = self.from_date.isoformat() if self.from_date else "?"
        end = self.to_date.isoformat() if self.to_date else "?"
        return f"{start} .. {end}"


class TrackedUser(BaseModel):
    """A username in the tracked list with its latest fetch outcome.

    Holds stats or an error, never both. Neither means the user has not
    been fetched yet (or a fetch is still in flight).
    """

    model_config = ConfigDict(frozen=True)

    username: str
    stats: ContributionStats | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> "TrackedUser":
        if self.stats is not None and self.error is not None:
            raise ValueError("TrackedUser cannot carry both stats and an error")
        return self

    @classmethod
    def pending(cls, username: str) -> "TrackedUser":
        return cls(username=username)

    @classmethod
    def with_stats(cls, username: str, stats: ContributionStats) -> "TrackedUser":
        return cls(username=username, stats=stats)

    @classmethod
    def with_error(cls, username: str, message: str) -> "TrackedUser":
        return cls(username=username, error=message)

    @property
    def key(self) -> str:
        """Case-insensitive identity within the tracked list."""
        return normalize_username(self.username)

    @property
    def status(self) -> UserStatus:
        if self.error is not None:
            return UserStatus.ERROR
        if self.stats is not None:
            return UserStatus.STATS
        return UserStatus.UNFETCHED


def normalize_username(username: str) -> str:
    """Lowercase key used for duplicate checks and removal."""
    return username.strip().lower()

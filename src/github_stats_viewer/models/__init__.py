"""Data models for GitHub Stats Viewer."""

from github_stats_viewer.models.contribution import ContributionStats
from github_stats_viewer.models.user import (
    DateRange,
    TrackedUser,
    UserStatus,
    normalize_username,
)

__all__ = [
    "ContributionStats",
    "DateRange",
    "TrackedUser",
    "UserStatus",
    "normalize_username",
]

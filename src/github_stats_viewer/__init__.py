"""GitHub Stats Viewer - Compare contribution counts across GitHub users.

Tracks a list of usernames and, for the active date range, fetches each
user's commit, issue, pull request, review and repository contribution
counts from the GitHub GraphQL API.

Example usage:
    ```python
    from datetime import date

    from github_stats_viewer import Config, StatsWorkflow

    async with StatsWorkflow(Config.from_env()) as workflow:
        await workflow.set_date_range(date(2024, 1, 1), date(2024, 1, 31))
        await workflow.add_user("torvalds")
        print(workflow.users)
    ```
"""

from github_stats_viewer.config import Config
from github_stats_viewer.exceptions import (
    GitHubGraphQLError,
    GitHubTransportError,
    MissingInputError,
    StatsViewerError,
    UserNotFoundError,
)
from github_stats_viewer.models import (
    ContributionStats,
    DateRange,
    TrackedUser,
    UserStatus,
)
from github_stats_viewer.services import GitHubGraphQLClient, StatsWorkflow

try:
    from github_stats_viewer._version import version as __version__
except ImportError:
    __version__ = "0.0.0.dev0"

__all__ = [
    # Workflow
    "StatsWorkflow",
    "GitHubGraphQLClient",
    # Configuration
    "Config",
    # Exceptions
    "StatsViewerError",
    "MissingInputError",
    "GitHubTransportError",
    "GitHubGraphQLError",
    "UserNotFoundError",
    # Models
    "ContributionStats",
    "DateRange",
    "TrackedUser",
    "UserStatus",
]

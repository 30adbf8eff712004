"""Services for fetching and tracking contribution stats."""

from github_stats_viewer.services.github_graphql_client import GitHubGraphQLClient
from github_stats_viewer.services.stats_workflow import StatsWorkflow

__all__ = [
    "GitHubGraphQLClient",
    "StatsWorkflow",
]

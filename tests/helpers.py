"""Shared builders for GraphQL payloads and mocked clients."""

import asyncio
import json
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import httpx

from github_stats_viewer.models.contribution import ContributionStats
from github_stats_viewer.models.user import DateRange
from github_stats_viewer.services.github_graphql_client import GitHubGraphQLClient

GRAPHQL_URL = "https://api.github.com/graphql"


def contributions_payload(
    commits: int = 0,
    issues: int = 0,
    pull_requests: int = 0,
    reviews: int = 0,
    repositories: int = 0,
) -> dict[str, Any]:
    """A contributionsCollection object as GitHub returns it."""
    return {
        "totalCommitContributions": commits,
        "totalIssueContributions": issues,
        "totalPullRequestContributions": pull_requests,
        "totalPullRequestReviewContributions": reviews,
        "totalRepositoryContributions": repositories,
    }


def make_stats(**counters: int) -> ContributionStats:
    """ContributionStats with every counter zero unless given."""
    values = dict.fromkeys(
        ["commits", "issues", "pull_requests", "pull_request_reviews", "repositories"], 0
    )
    values.update(counters)
    return ContributionStats(**values)


def user_response(**counters: int) -> dict[str, Any]:
    """Full GraphQL response body for an existing user."""
    return {"data": {"user": {"contributionsCollection": contributions_payload(**counters)}}}


def mock_transport(
    handler: Callable[[httpx.Request], httpx.Response],
    requests: list | None = None,
) -> httpx.MockTransport:
    """MockTransport that records every request it sees."""

    def record(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return handler(request)

    return httpx.MockTransport(record)


def request_variables(request: httpx.Request) -> dict[str, Any]:
    return json.loads(request.content)["variables"]


def fake_graphql_client(
    outcomes: dict[str, Any],
    delays: dict[str, float] | None = None,
) -> MagicMock:
    """Stand-in client keyed by lowercase username.

    An outcome is either a contributionsCollection dict or an exception
    instance to raise. Delays let tests control completion order.
    """
    client = MagicMock(spec=GitHubGraphQLClient)

    async def get_contributions(username: str, date_range: DateRange):
        if delays:
            await asyncio.sleep(delays.get(username.lower(), 0))
        outcome = outcomes[username.lower()]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    client.get_contributions = AsyncMock(side_effect=get_contributions)
    client.close = AsyncMock()
    return client

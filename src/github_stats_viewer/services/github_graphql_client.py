"""GitHub GraphQL API client for contribution counters."""

import logging
from typing import Any, Optional

import httpx

from github_stats_viewer.config import Config
from github_stats_viewer.exceptions import (
    GitHubGraphQLError,
    GitHubTransportError,
    MissingInputError,
    UserNotFoundError,
)
from github_stats_viewer.models.user import DateRange

logger = logging.getLogger(__name__)

# Login and window are passed as variables, never spliced into the query text
CONTRIBUTIONS_QUERY = """
query($login: String!, $from: DateTime!, $to: DateTime!) {
  user(login: $login) {
    contributionsCollection(from: $from, to: $to) {
      totalCommitContributions
      totalIssueContributions
      totalPullRequestContributions
      totalPullRequestReviewContributions
      totalRepositoryContributions
    }
  }
}
"""


class GitHubGraphQLClient:
    """Async client for GitHub GraphQL API."""

    def __init__(
        self,
        config: Config,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_headers(self) -> dict[str, str]:
        """Get headers for API requests.

        The token is optional; without one the request goes out anonymously.
        """
        headers = {
            "Content-Type": "application/json",
            "User-Agent": "github-stats-viewer/0.1.0",
        }
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self._get_headers(),
                timeout=self.config.request_timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "GitHubGraphQLClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def execute(
        self,
        query: str,
        variables: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """Execute a GraphQL query.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            Query result data

        Raises:
            GitHubTransportError: If the request fails or the body is not a
                GraphQL response
            GitHubGraphQLError: If the response reports GraphQL errors
        """
        client = await self._get_client()
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = await client.post(self.config.github_graphql_url, json=payload)
        except httpx.HTTPError as e:
            raise GitHubTransportError(f"GraphQL request failed: {e}") from e

        logger.debug("GraphQL response status %d", response.status_code)

        try:
            result = response.json()
        except ValueError as e:
            raise GitHubTransportError(
                f"GraphQL response is not JSON (status {response.status_code})",
                status_code=response.status_code,
            ) from e

        if not isinstance(result, dict) or ("data" not in result and "errors" not in result):
            raise GitHubTransportError(
                f"Unexpected GraphQL response (status {response.status_code}): "
                f"{response.text[:200]}",
                status_code=response.status_code,
            )

        # Check for GraphQL errors; any truthy shape counts
        errors = result.get("errors")
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            error_messages = [
                e.get("message", "Unknown error") if isinstance(e, dict) else str(e)
                for e in errors
            ]
            raise GitHubGraphQLError(
                f"GraphQL errors: {'; '.join(error_messages)}",
                errors=errors,
            )

        data = result.get("data") or {}
        if not isinstance(data, dict):
            raise GitHubTransportError(
                "GraphQL data is not an object", status_code=response.status_code
            )
        return data

    async def get_contributions(
        self,
        username: str,
        date_range: DateRange,
    ) -> dict[str, Any]:
        """Get a user's contribution counters for a date range.

        Args:
            username: GitHub username
            date_range: Complete date range; the end day is inclusive

        Returns:
            The contributionsCollection object

        Raises:
            MissingInputError: If the username or either date is missing
            UserNotFoundError: If the response has no such user
        """
        if not username or not date_range.is_complete:
            raise MissingInputError("Missing date or username")

        from_datetime, to_datetime = date_range.to_graphql_window()
        variables = {
            "login": username,
            "from": from_datetime,
            "to": to_datetime,
        }

        logger.debug("Fetching contributions for %s (%s)", username, date_range)
        result = await self.execute(CONTRIBUTIONS_QUERY, variables)

        user = result.get("user")
        if not user:
            raise UserNotFoundError(username)
        if not isinstance(user, dict):
            raise GitHubTransportError(f"Malformed user object for {username}")

        collection = user.get("contributionsCollection")
        if not isinstance(collection, dict):
            raise GitHubTransportError(
                f"Response for {username} has no contributionsCollection"
            )
        return collection

"""Tracked user list and the stats fetch workflow behind it."""

import asyncio
import logging
from contextlib import contextmanager
from datetime import date
from typing import Iterator

from pydantic import ValidationError

from github_stats_viewer.config import Config, parse_username_list
from github_stats_viewer.exceptions import (
    GitHubGraphQLError,
    GitHubTransportError,
    MissingInputError,
    UserNotFoundError,
)
from github_stats_viewer.models.contribution import ContributionStats
from github_stats_viewer.models.user import DateRange, TrackedUser, normalize_username
from github_stats_viewer.services.github_graphql_client import GitHubGraphQLClient

logger = logging.getLogger(__name__)

ERROR_MISSING_INPUT = "Missing date or username"
ERROR_NETWORK = "Network or API error."
ERROR_NOT_FOUND = "User not found or API error."


class StatsWorkflow:
    """Keeps an ordered, case-insensitively unique list of tracked users and
    their contribution stats for the active date range.

    All mutations happen on the event loop between awaits, so the list needs
    no lock. Each refresh takes a new generation number and results from an
    older generation are dropped instead of overwriting newer ones.

    Example usage:
        ```python
        async with StatsWorkflow(Config.from_env()) as workflow:
            workflow.seed_from_static_list("alice, bob")
            await workflow.set_date_range(date(2024, 1, 1), date(2024, 1, 31))
            for user in workflow.users:
                print(user.username, user.stats or user.error)
        ```
    """

    def __init__(
        self,
        config: Config,
        graphql_client: GitHubGraphQLClient | None = None,
    ):
        self.config = config
        self.graphql_client = graphql_client or GitHubGraphQLClient(config)
        self._users: list[TrackedUser] = []
        self._date_range = DateRange()
        self._generation = 0
        self._in_flight = 0

    async def __aenter__(self) -> "StatsWorkflow":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.graphql_client.close()

    @property
    def users(self) -> tuple[TrackedUser, ...]:
        """Snapshot of the tracked list in display order."""
        return tuple(self._users)

    @property
    def usernames(self) -> list[str]:
        return [user.username for user in self._users]

    @property
    def busy(self) -> bool:
        """True while any fetch or refresh batch is in flight."""
        return self._in_flight > 0

    @property
    def date_range(self) -> DateRange:
        return self._date_range

    @property
    def generation(self) -> int:
        return self._generation

    @contextmanager
    def _busy(self) -> Iterator[None]:
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1

    def _index_of(self, username: str) -> int | None:
        key = normalize_username(username)
        for index, user in enumerate(self._users):
            if user.key == key:
                return index
        return None

    def _index_of_entry(self, entry: TrackedUser) -> int | None:
        for index, user in enumerate(self._users):
            if user is entry:
                return index
        return None

    async def fetch_user_stats(self, username: str, date_range: DateRange) -> TrackedUser:
        """Fetch stats for one user. Never raises.

        Args:
            username: GitHub username
            date_range: Window to count contributions in

        Returns:
            TrackedUser carrying either stats or an error message
        """
        username = username or ""
        if not username or not date_range.is_complete:
            return TrackedUser.with_error(username, ERROR_MISSING_INPUT)

        try:
            data = await self.graphql_client.get_contributions(username, date_range)
            stats = ContributionStats.from_graphql(data)
        except (GitHubGraphQLError, UserNotFoundError) as e:
            logger.warning("No stats for %s: %s", username, e)
            return TrackedUser.with_error(username, ERROR_NOT_FOUND)
        except (GitHubTransportError, ValidationError) as e:
            logger.warning("Request for %s failed: %s", username, e)
            return TrackedUser.with_error(username, ERROR_NETWORK)
        except MissingInputError:
            return TrackedUser.with_error(username, ERROR_MISSING_INPUT)

        logger.debug("Fetched %d contributions for %s", stats.total, username)
        return TrackedUser.with_stats(username, stats)

    async def add_user(
        self,
        username: str,
        date_range: DateRange | None = None,
    ) -> TrackedUser | None:
        """Track a new user and fetch their stats.

        The entry is reserved at the end of the list before the request goes
        out, so a second add for the same name while the first is in flight
        is ignored as a duplicate.

        Args:
            username: GitHub username
            date_range: Window to fetch; defaults to the active range

        Returns:
            The stored entry, or None if nothing was added or the result was
            discarded (entry removed, or a newer refresh took over)
        """
        username = (username or "").strip()
        if not username:
            return None
        if self._index_of(username) is not None:
            logger.debug("Ignoring duplicate user %s", username)
            return None

        if date_range is None:
            date_range = self._date_range

        placeholder = TrackedUser.pending(username)
        self._users.append(placeholder)
        generation = self._generation
        logger.info("Adding user %s", username)

        with self._busy():
            result = await self.fetch_user_stats(username, date_range)

        index = self._index_of_entry(placeholder)
        if index is None:
            logger.debug("User %s was removed or refreshed while fetching", username)
            return None
        if generation != self._generation:
            logger.debug("Dropping stale result for %s", username)
            return None

        self._users[index] = result
        return result

    def remove_user(self, username: str) -> int:
        """Stop tracking a user (case-insensitive). Returns entries removed."""
        if not username or not username.strip():
            return 0

        key = normalize_username(username)
        before = len(self._users)
        self._users = [user for user in self._users if user.key != key]
        removed = before - len(self._users)
        if removed:
            logger.info("Removed user %s", username)
        return removed

    async def refresh_all(self, date_range: DateRange | None = None) -> bool:
        """Refetch every tracked user in parallel.

        Results are written back positionally, so the list keeps its order no
        matter which request finishes first. One user's failure only marks
        that entry.

        Args:
            date_range: Window to fetch; defaults to the active range

        Returns:
            True if results were applied, False if the refresh did not run or
            was superseded by a newer one
        """
        if date_range is None:
            date_range = self._date_range
        if not date_range.is_complete or not self._users:
            return False

        self._generation += 1
        generation = self._generation
        snapshot = list(self._users)
        logger.info(
            "Refreshing %d users for %s (generation %d)",
            len(snapshot),
            date_range,
            generation,
        )

        with self._busy():
            results = await asyncio.gather(
                *(self.fetch_user_stats(user.username, date_range) for user in snapshot)
            )

        if generation != self._generation:
            logger.info("Discarding results of superseded refresh %d", generation)
            return False

        # Entries removed meanwhile stay removed; entries added meanwhile stay
        replacements = {id(entry): result for entry, result in zip(snapshot, results)}
        self._users = [replacements.get(id(user), user) for user in self._users]
        return True

    async def set_date_range(
        self,
        from_date: date | None,
        to_date: date | None,
    ) -> None:
        """Change the active range and refresh everyone once it is complete.

        Raises:
            ValidationError: If from_date is after to_date
        """
        new_range = DateRange(from_date=from_date, to_date=to_date)
        if new_range == self._date_range:
            return

        self._date_range = new_range
        if new_range.is_complete:
            await self.refresh_all(new_range)

    def seed_from_static_list(self, names: str | None) -> list[str]:
        """Track users from a comma-separated list without fetching them.

        Returns:
            The usernames that were added
        """
        added = []
        for username in parse_username_list(names):
            if self._index_of(username) is None:
                self._users.append(TrackedUser.pending(username))
                added.append(username)

        if added:
            logger.info("Seeded %d users", len(added))
        return added

"""Exceptions for GitHub Stats Viewer.

Exception Hierarchy:
    StatsViewerError (base)
    ├── MissingInputError (username or date missing, raised before any request)
    ├── GitHubTransportError (connection failure or unparseable response)
    ├── GitHubGraphQLError (response carrying GraphQL errors)
    └── UserNotFoundError (response with a null user)

Usage:
    - The GraphQL client raises these.
    - StatsWorkflow catches them per user and stores a readable message on
      the tracked entry, so none of them reach workflow callers.
"""

__all__ = [
    "StatsViewerError",
    "MissingInputError",
    "GitHubTransportError",
    "GitHubGraphQLError",
    "UserNotFoundError",
]


class StatsViewerError(Exception):
    """Base exception for all GitHub Stats Viewer errors."""

    pass


class MissingInputError(StatsViewerError):
    """Raised when a username or either end of the date range is missing."""

    pass


class GitHubTransportError(StatsViewerError):
    """Raised when the request fails or the response cannot be understood."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class GitHubGraphQLError(StatsViewerError):
    """Exception for GraphQL API errors."""

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []


class UserNotFoundError(StatsViewerError):
    """Raised when a GitHub user is not found."""

    def __init__(self, username: str):
        super().__init__(f"User not found: {username}")
        self.username = username

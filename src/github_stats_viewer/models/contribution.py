"""Contribution statistics model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# contributionsCollection field -> model field
GRAPHQL_FIELDS = {
    "totalCommitContributions": "commits",
    "totalIssueContributions": "issues",
    "totalPullRequestContributions": "pull_requests",
    "totalPullRequestReviewContributions": "pull_request_reviews",
    "totalRepositoryContributions": "repositories",
}


class ContributionStats(BaseModel):
    """Contribution counters for one user within a date window.

    Counters are strict: strings, booleans and floats from a malformed
    response fail validation instead of being coerced.
    """

    model_config = ConfigDict(frozen=True)

    commits: int = Field(ge=0, strict=True)
    issues: int = Field(ge=0, strict=True)
    pull_requests: int = Field(ge=0, strict=True)
    pull_request_reviews: int = Field(ge=0, strict=True)
    repositories: int = Field(ge=0, strict=True)

    @classmethod
    def from_graphql(cls, data: dict[str, Any]) -> "ContributionStats":
        """Create from GraphQL contributionsCollection response.

        A missing counter comes through as None and fails validation.
        """
        return cls(
            **{
                field: data.get(graphql_name)
                for graphql_name, field in GRAPHQL_FIELDS.items()
            }
        )

    @property
    def total(self) -> int:
        """Sum of all five counters."""
        return (
            self.commits
            + self.issues
            + self.pull_requests
            + self.pull_request_reviews
            + self.repositories
        )

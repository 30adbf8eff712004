"""Tests for the command line interface."""

import json

import httpx
import pytest
from typer.testing import CliRunner

from github_stats_viewer import __version__
from github_stats_viewer.cli import app
from github_stats_viewer.services.github_graphql_client import GitHubGraphQLClient

from helpers import contributions_payload, mock_transport, request_variables

runner = CliRunner()


def github_handler(counters: dict[str, int]):
    """Respond with the given commit count per login, null user otherwise."""

    def handler(request: httpx.Request) -> httpx.Response:
        login = request_variables(request)["login"]
        if login in counters:
            collection = contributions_payload(commits=counters[login])
            return httpx.Response(
                200, json={"data": {"user": {"contributionsCollection": collection}}}
            )
        return httpx.Response(200, json={"data": {"user": None}})

    return handler


@pytest.fixture
def github(clean_env):
    """Route workflow requests to a mocked GitHub; returns the request log."""
    requests = []

    def install(counters: dict[str, int]):
        transport = mock_transport(github_handler(counters), requests)
        clean_env.setattr(
            "github_stats_viewer.services.stats_workflow.GitHubGraphQLClient",
            lambda config: GitHubGraphQLClient(config, transport=transport),
        )
        return requests

    return install


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestShow:
    """Tests for the show command."""

    def test_json_output(self, github, clean_env):
        """Test seeded and argument users come back in order."""
        requests = github({"alice": 5})
        clean_env.setenv("GITHUB_STATS_USERS", "alice, bob")

        result = runner.invoke(
            app, ["show", "carol", "--from", "2024-01-01", "--to", "2024-01-31", "--json"]
        )

        assert result.exit_code == 0, result.output
        users = json.loads(result.stdout)
        assert [user["username"] for user in users] == ["alice", "bob", "carol"]
        assert users[0]["stats"]["commits"] == 5
        assert users[0]["error"] is None
        assert users[1]["error"] == "User not found or API error."
        assert users[1]["stats"] is None
        assert len(requests) == 3
        assert request_variables(requests[0])["to"] == "2024-01-31T23:59:59Z"

    def test_table_output(self, github):
        github({"alice": 7})

        result = runner.invoke(app, ["show", "alice", "--from", "2024-01-01", "--to", "2024-01-31"])

        assert result.exit_code == 0, result.output
        assert "alice" in result.output
        assert "7" in result.output

    def test_duplicate_arguments_fetched_once(self, github):
        requests = github({"alice": 1})

        result = runner.invoke(
            app, ["show", "alice", "ALICE", "--from", "2024-01-01", "--to", "2024-01-02", "--json"]
        )

        assert result.exit_code == 0, result.output
        assert len(json.loads(result.stdout)) == 1
        assert len(requests) == 1

    def test_no_users(self, github):
        requests = github({})

        result = runner.invoke(app, ["show"])

        assert result.exit_code == 0
        assert "No users to show" in result.output
        assert requests == []

    def test_invalid_date(self, github):
        github({})

        result = runner.invoke(app, ["show", "alice", "--from", "01/02/2024"])

        assert result.exit_code == 1
        assert "Invalid date format" in result.output

    def test_reversed_range(self, github):
        requests = github({"alice": 1})

        result = runner.invoke(
            app, ["show", "alice", "--from", "2024-02-01", "--to", "2024-01-01"]
        )

        assert result.exit_code == 1
        assert requests == []


class TestInteractive:
    """Tests for the interactive command."""

    def test_add_remove_and_range(self, github, clean_env):
        requests = github({"alice": 2, "bob": 3})
        clean_env.setenv("GITHUB_STATS_USERS", "alice")

        result = runner.invoke(
            app,
            ["interactive", "--from", "2024-01-01", "--to", "2024-01-31"],
            input="add bob\nadd BOB\nremove alice\nrange 2024-02-01 2024-02-29\nlist\nquit\n",
        )

        assert result.exit_code == 0, result.output
        assert "BOB is already tracked" in result.output
        logins = [request_variables(request)["login"] for request in requests]
        # Seeded fetch, the add, then one refresh with only bob left
        assert logins == ["alice", "bob", "bob"]
        assert request_variables(requests[-1])["from"] == "2024-02-01T00:00:00Z"

    def test_bad_commands(self, github):
        github({})

        result = runner.invoke(
            app,
            ["interactive", "--from", "2024-01-01", "--to", "2024-01-31"],
            input="frobnicate\nrange 2024-02-01\nrange 2024-03-01 2024-02-01\nadd\n",
        )

        assert result.exit_code == 0, result.output
        assert "Unknown command: frobnicate" in result.output
        assert "Usage: range FROM TO" in result.output
        assert "is after" in result.output
        assert "Usage: add NAME" in result.output


class TestCheckToken:
    def test_without_token(self, clean_env):
        result = runner.invoke(app, ["check-token"])

        assert result.exit_code == 0
        assert "No GitHub token configured" in result.output

    def test_with_token(self, clean_env):
        clean_env.setenv("GITHUB_TOKEN", "ghp_test")
        clean_env.setenv("GITHUB_USERS", "alice,bob")

        result = runner.invoke(app, ["check-token"])

        assert result.exit_code == 0
        assert "GitHub token is configured" in result.output
        assert "alice, bob" in result.output

"""CLI interface for GitHub Stats Viewer."""

import asyncio
import json
import logging
from datetime import date, timedelta
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from github_stats_viewer import __version__
from github_stats_viewer.config import Config
from github_stats_viewer.exceptions import StatsViewerError
from github_stats_viewer.models.user import DateRange, normalize_username
from github_stats_viewer.output.console import Console as OutputConsole
from github_stats_viewer.services.stats_workflow import StatsWorkflow

app = typer.Typer(
    name="github-stats-viewer",
    help="Compare GitHub contribution counts across users",
    add_completion=False,
)

console = Console()

DEFAULT_RANGE_DAYS = 30

INTERACTIVE_HELP = """Commands:
  add NAME           track a user and fetch their stats
  remove NAME        stop tracking a user
  range FROM TO      change the date range (YYYY-MM-DD) and refresh everyone
  list               show the table again
  help               show this message
  quit               leave"""


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"github-stats-viewer version {__version__}")
        raise typer.Exit()


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse YYYY-MM-DD, exiting with an error message on bad input."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        console.print(f"[red]Invalid date format: {value}. Use YYYY-MM-DD[/red]")
        raise typer.Exit(1)


def resolve_range(since: Optional[str], until: Optional[str]) -> tuple[date, date]:
    """Parse the range options, defaulting to the last 30 days."""
    from_date = parse_date(since)
    to_date = parse_date(until)

    if to_date is None:
        to_date = date.today()
    if from_date is None:
        from_date = to_date - timedelta(days=DEFAULT_RANGE_DAYS)

    if from_date > to_date:
        console.print(f"[red]--from {from_date} is after --to {to_date}[/red]")
        raise typer.Exit(1)

    return from_date, to_date


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """GitHub Stats Viewer - Compare contribution counts across GitHub users."""
    pass


@app.command()
def show(
    usernames: Optional[List[str]] = typer.Argument(
        None,
        help="GitHub usernames, added after the configured seed list",
    ),
    since: Optional[str] = typer.Option(
        None,
        "--from",
        help="First day of the range (YYYY-MM-DD), defaults to 30 days ago",
    ),
    until: Optional[str] = typer.Option(
        None,
        "--to",
        help="Last day of the range (YYYY-MM-DD, inclusive), defaults to today",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print results as JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Minimal output",
    ),
):
    """Show contribution counts for the seed list plus USERNAMES.

    Examples:
        github-stats-viewer show torvalds gvanrossum
        github-stats-viewer show --from 2024-01-01 --to 2024-01-31 --json
    """
    setup_logging(verbose=verbose, debug=debug)
    from_date, to_date = resolve_range(since, until)

    try:
        asyncio.run(
            _run_show(
                usernames=usernames or [],
                from_date=from_date,
                to_date=to_date,
                as_json=as_json,
                verbose=verbose,
                quiet=quiet or as_json,
            )
        )
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled[/yellow]")
        raise typer.Exit(1)
    except (StatsViewerError, ValidationError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


async def _run_show(
    usernames: list[str],
    from_date: date,
    to_date: date,
    as_json: bool,
    verbose: bool,
    quiet: bool,
):
    """Seed, fetch once and print."""
    output_console = OutputConsole(verbose=verbose, quiet=quiet)
    config = Config.from_env()

    async with StatsWorkflow(config) as workflow:
        workflow.seed_from_static_list(config.seed_users)
        workflow.seed_from_static_list(",".join(usernames))

        if not workflow.users:
            output_console.print_warning(
                "No users to show. Pass usernames or set GITHUB_STATS_USERS."
            )
            return

        if not config.is_authenticated:
            output_console.print_verbose(
                "[yellow]No GitHub token configured, sending anonymous requests[/yellow]"
            )

        output_console.print_header(DateRange(from_date=from_date, to_date=to_date))

        with output_console.create_progress() as progress:
            progress.add_task(f"Fetching {len(workflow.users)} users...", total=None)
            await workflow.set_date_range(from_date, to_date)

        if as_json:
            typer.echo(
                json.dumps(
                    [user.model_dump(mode="json") for user in workflow.users],
                    indent=2,
                )
            )
        else:
            output_console.print_users(workflow.users)


@app.command()
def interactive(
    since: Optional[str] = typer.Option(
        None,
        "--from",
        help="First day of the range (YYYY-MM-DD), defaults to 30 days ago",
    ),
    until: Optional[str] = typer.Option(
        None,
        "--to",
        help="Last day of the range (YYYY-MM-DD, inclusive), defaults to today",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Verbose output",
    ),
):
    """Track users interactively, adding, removing and changing the range."""
    setup_logging(verbose=verbose)
    from_date, to_date = resolve_range(since, until)

    try:
        asyncio.run(_run_interactive(from_date, to_date, verbose=verbose))
    except KeyboardInterrupt:
        console.print()
    except StatsViewerError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


async def _run_interactive(from_date: date, to_date: date, verbose: bool = False):
    """Prompt loop driving a single workflow."""
    output_console = OutputConsole(verbose=verbose, console=console)
    config = Config.from_env()

    async with StatsWorkflow(config) as workflow:
        workflow.seed_from_static_list(config.seed_users)
        with output_console.create_progress() as progress:
            progress.add_task("Fetching stats...", total=None)
            await workflow.set_date_range(from_date, to_date)

        output_console.print_header(workflow.date_range)
        output_console.print_users(workflow.users)
        output_console.print(INTERACTIVE_HELP)

        while True:
            try:
                line = console.input("[bold]> [/bold]")
            except EOFError:
                break

            command, _, argument = line.strip().partition(" ")
            command = command.lower()
            argument = argument.strip()

            if not command:
                continue
            if command in ("quit", "exit", "q"):
                break
            if command == "help":
                output_console.print(INTERACTIVE_HELP)
            elif command == "list":
                output_console.print_users(workflow.users)
            elif command == "add":
                if not argument:
                    output_console.print_error("Usage: add NAME")
                    continue
                if normalize_username(argument) in (user.key for user in workflow.users):
                    output_console.print_warning(f"{argument} is already tracked")
                    continue
                await workflow.add_user(argument)
                output_console.print_users(workflow.users)
            elif command == "remove":
                if not workflow.remove_user(argument):
                    output_console.print_warning(f"{argument or 'Nobody'} is not tracked")
                output_console.print_users(workflow.users)
            elif command == "range":
                parts = argument.split()
                if len(parts) != 2:
                    output_console.print_error("Usage: range FROM TO")
                    continue
                try:
                    new_from = date.fromisoformat(parts[0])
                    new_to = date.fromisoformat(parts[1])
                    await workflow.set_date_range(new_from, new_to)
                except ValidationError:
                    output_console.print_error(f"{parts[0]} is after {parts[1]}")
                    continue
                except ValueError:
                    output_console.print_error("Dates must be YYYY-MM-DD")
                    continue
                output_console.print_header(workflow.date_range)
                output_console.print_users(workflow.users)
            else:
                output_console.print_error(f"Unknown command: {command}")


@app.command()
def check_token():
    """Check GitHub token configuration."""
    config = Config.from_env()

    if config.is_authenticated:
        console.print("[green]GitHub token is configured[/green]")
    else:
        console.print("[yellow]No GitHub token configured[/yellow]")
        console.print("Requests will be sent anonymously.")
        console.print()
        console.print("To configure a token:")
        console.print("  export GITHUB_TOKEN=your_token_here")
        console.print()
        console.print("Create a token at: https://github.com/settings/tokens")
        console.print("No special scopes needed for public data access.")

    seeds = config.seed_usernames
    if seeds:
        console.print(f"Seed users: {', '.join(seeds)}")
    else:
        console.print("Seed users: none (set GITHUB_STATS_USERS)")


if __name__ == "__main__":
    app()

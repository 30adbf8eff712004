"""Rich console output for tracked users."""

from typing import Iterable

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from github_stats_viewer.models.user import DateRange, TrackedUser, UserStatus

STAT_COLUMNS = [
    ("Commits", "commits"),
    ("Issues", "issues"),
    ("PRs", "pull_requests"),
    ("PR Reviews", "pull_request_reviews"),
    ("Repos", "repositories"),
]


class Console:
    """Wrapper for rich console output."""

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        console: RichConsole | None = None,
    ):
        self.console = console or RichConsole()
        self.verbose = verbose
        self.quiet = quiet

    def print(self, *args, **kwargs):
        """Print to console (respects quiet mode)."""
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def print_verbose(self, *args, **kwargs):
        """Print only in verbose mode."""
        if self.verbose and not self.quiet:
            self.console.print(*args, **kwargs)

    def print_error(self, message: str):
        """Print error message."""
        self.console.print(f"[red]Error:[/red] {message}")

    def print_warning(self, message: str):
        """Print warning message."""
        self.console.print(f"[yellow]Warning:[/yellow] {message}")

    def create_progress(self) -> Progress:
        """Create a spinner shown while requests are in flight."""
        return Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
            disable=self.quiet,
        )

    def print_header(self, date_range: DateRange):
        """Print the title panel with the active range."""
        if self.quiet:
            return

        self.console.print()
        self.console.print(
            Panel(
                f"[bold blue]GitHub Stats Viewer[/bold blue]\n[dim]Range: {date_range}[/dim]",
                expand=False,
            )
        )
        self.console.print()

    def build_users_table(self, users: Iterable[TrackedUser]) -> Table:
        """One row per user: counters, the error, or a pending marker."""
        table = Table(title="Contributions", expand=False)
        table.add_column("User", style="bold")
        for label, _ in STAT_COLUMNS:
            table.add_column(label, justify="right")

        for user in users:
            if user.status is UserStatus.STATS:
                table.add_row(
                    user.username,
                    *(str(getattr(user.stats, field)) for _, field in STAT_COLUMNS),
                )
            elif user.status is UserStatus.ERROR:
                table.add_row(user.username, f"[red]{user.error}[/red]")
            else:
                table.add_row(user.username, "[dim]pending[/dim]")

        return table

    def print_users(self, users: Iterable[TrackedUser]):
        """Print the tracked users table."""
        users = list(users)
        if not users:
            self.print("[dim]No users tracked.[/dim]")
            return

        # Errors stay visible in quiet mode
        self.console.print(self.build_users_table(users))

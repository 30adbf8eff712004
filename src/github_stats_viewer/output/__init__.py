"""Output handlers for GitHub Stats Viewer."""

from github_stats_viewer.output.console import Console

__all__ = [
    "Console",
]

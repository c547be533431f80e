"""Output formatting utilities for the CLI.

Diagnostics are written to stderr; stdout is reserved for the agent plugin
protocol (metric lines and the meta document).
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

import typer
from rich.console import Console
from rich.table import Table
from rich.theme import Theme

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME, stderr=True)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages, tables and plugin lines."""

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {msg}")

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def kv(self, items: Mapping[str, Any]) -> None:
        """Print key-value pairs."""
        for k, v in items.items():
            console.print(f"[meta]{k}[/]: {v}")

    def lines(self, lines: Iterable[str]) -> None:
        """Write plain lines to stdout for the monitoring agent."""
        for line in lines:
            typer.echo(line)

    def metrics_table(
        self, snapshot: Mapping[str, float], title: str = "Metrics"
    ) -> None:
        """
        Render a metric snapshot sorted by key.

        Count metrics are shown as integers, runtimes with two decimals.
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Metric", style="ok")
        t.add_column("Value", justify="right")

        for key in sorted(snapshot):
            value = snapshot[key]
            shown = f"{value:.2f}" if ".runtime." in key else f"{value:.0f}"
            t.add_row(key, shown)

        console.print(t)


out = Out()

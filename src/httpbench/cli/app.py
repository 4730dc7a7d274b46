"""Main Typer application, entry point for the ``httpbench`` CLI."""

from __future__ import annotations

import typer

from httpbench.cli.run import run_cmd

app = typer.Typer(
    name="httpbench",
    help="Concurrent HTTP GET latency and throughput benchmark.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(
    name="httpbench",
    help="Benchmark a host with concurrent HTTP GET requests.",
    # Lets a negative request count such as "-5" reach the positional argument.
    context_settings={"ignore_unknown_options": True},
)(run_cmd)


def main() -> None:
    """Console-script entry point."""
    app()

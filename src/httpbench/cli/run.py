"""The benchmark command: ``httpbench <host> [<requests-per-worker>]``."""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from httpbench import __version__
from httpbench._internal.config import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_TIMEOUT,
    HTTP_PORT,
    build_config,
)
from httpbench._internal.errors import ArgumentError, HttpBenchError
from httpbench._internal.logging import setup_logging
from httpbench.engine.coordinator import Coordinator
from httpbench.metrics.aggregator import (
    aggregate,
    render_outcome,
    render_rich_table,
    render_table,
)

console = Console()
err_console = Console(stderr=True)

USAGE = "Usage: httpbench <host> [<requests-per-worker>]"


def _version_callback(value: bool) -> None:
    """Print version and exit.

    Args:
        value: True if --version was passed.
    """
    if value:
        typer.echo(f"httpbench {__version__}")
        raise typer.Exit


def run_cmd(
    host: str | None = typer.Argument(
        None,
        help="Hostname or IP address to benchmark on port 80.",
        show_default=False,
    ),
    requests_per_worker: str | None = typer.Argument(
        None,
        help="Requests per worker (default 10; invalid values use the default).",
        show_default=False,
    ),
    max_workers: int = typer.Option(
        DEFAULT_MAX_WORKERS,
        "--max-workers",
        "-w",
        help="Upper bound on workers; the CPU core count may lower it.",
    ),
    timeout: float = typer.Option(
        DEFAULT_TIMEOUT,
        "--timeout",
        "-t",
        help="Socket timeout per operation in seconds (0 disables).",
    ),
    rich_output: bool = typer.Option(
        False,
        "--rich",
        help="Render the results with Rich instead of a plain ASCII table.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging.",
    ),
    log_json: bool = typer.Option(
        False,
        "--log-json",
        help="Emit logs as JSON lines on stderr.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Benchmark a host with concurrent HTTP GET requests."""
    setup_logging(
        level=logging.DEBUG if verbose else logging.WARNING,
        json_format=log_json,
    )

    try:
        config = build_config(
            host,
            requests_per_worker,
            max_workers=max_workers,
            timeout=timeout,
            port=HTTP_PORT,
        )
    except ArgumentError:
        err_console.print(USAGE, markup=False, highlight=False)
        raise typer.Exit(code=1) from None
    except HttpBenchError as exc:
        err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    coordinator = Coordinator(config)
    typer.echo(
        f"Executing test with {coordinator.num_workers} threads, each making "
        f"{config.requests_per_worker} requests to host: {config.host}"
    )

    result = coordinator.run()
    report = aggregate(
        result.tasks,
        worker_count=coordinator.num_workers,
        requests_per_worker=config.requests_per_worker,
        failed_workers=result.failed_workers,
    )

    if rich_output:
        console.print(render_rich_table(report))
    else:
        typer.echo(render_table(report))
    typer.echo(render_outcome(report))

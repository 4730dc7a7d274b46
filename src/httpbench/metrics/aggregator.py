"""Combine per-worker latencies into the final report and render it.

Metrics are computed against the nominal request count, so failed
requests lower the average latency and raise the throughput instead of
showing up as an error rate. ``render_outcome`` prints the real success
count next to the table.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.table import Table

from httpbench.metrics.models import BenchmarkReport

if TYPE_CHECKING:
    from collections.abc import Iterable

    from httpbench.metrics.models import WorkerTask

_NAME_WIDTH = 30
_VALUE_WIDTH = 26
_RULE = f"+{'-' * (_NAME_WIDTH + 2)}+{'-' * (_VALUE_WIDTH + 2)}+"


def aggregate(
    tasks: Iterable[WorkerTask],
    worker_count: int,
    requests_per_worker: int,
    failed_workers: Iterable[int] = (),
) -> BenchmarkReport:
    """Build a BenchmarkReport from joined worker tasks.

    Args:
        tasks: Tasks of successfully joined workers.
        worker_count: Number of workers launched.
        requests_per_worker: Configured requests per worker.
        failed_workers: Ids of workers that could not be joined.

    Returns:
        The aggregated report. Throughput is 0.0 when no latency was
        recorded at all.
    """
    total_latency = 0.0
    succeeded = 0
    failed = 0
    for task in tasks:
        total_latency += task.total_latency
        succeeded += task.succeeded
        failed += task.failed

    nominal = worker_count * requests_per_worker
    average_latency = total_latency / nominal if nominal else 0.0
    throughput = nominal / total_latency if total_latency > 0 else 0.0

    return BenchmarkReport(
        worker_count=worker_count,
        requests_per_worker=requests_per_worker,
        total_latency=total_latency,
        average_latency=average_latency,
        throughput=throughput,
        succeeded_requests=succeeded,
        failed_requests=failed,
        failed_workers=tuple(sorted(failed_workers)),
    )


def _metric_rows(report: BenchmarkReport) -> list[tuple[str, str]]:
    return [
        ("Average Latency", f"{report.average_latency:.5f} seconds"),
        ("Total Requests", str(report.total_requests)),
        ("Throughput", f"{report.throughput:.2f} requests/sec"),
    ]


def _row(name: str, value: str) -> str:
    return f"| {name:<{_NAME_WIDTH}} | {value:<{_VALUE_WIDTH}} |"


def render_table(report: BenchmarkReport) -> str:
    """Render the report as a fixed-width ASCII table.

    Args:
        report: Report to render.

    Returns:
        Multi-line table without a trailing newline.
    """
    lines = [_RULE, _row("Metric", "Value"), _RULE]
    lines.extend(_row(name, value) for name, value in _metric_rows(report))
    lines.append(_RULE)
    return "\n".join(lines)


def render_rich_table(report: BenchmarkReport) -> Table:
    """Render the same three metric rows as a Rich table."""
    table = Table(title="Benchmark Results", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    for name, value in _metric_rows(report):
        table.add_row(name, value)
    return table


def render_outcome(report: BenchmarkReport) -> str:
    """Summarise how many requests actually succeeded.

    Args:
        report: Report to summarise.

    Returns:
        One line, plus a second one when workers could not be joined.
    """
    line = (
        f"Completed {report.succeeded_requests}/{report.total_requests} requests "
        f"({report.failed_requests} failed)"
    )
    if report.failed_workers:
        ids = ", ".join(str(w) for w in report.failed_workers)
        line += f"\nWorkers not joined: {ids}"
    return line

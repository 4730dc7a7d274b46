"""Per-worker task state and the final benchmark report."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = [
    "BenchmarkReport",
    "WorkerTask",
]


@dataclass
class WorkerTask:
    """One worker's slice of the benchmark.

    Created by the coordinator, mutated only by the worker thread that
    owns it, and read back only after that thread has been joined.

    Attributes:
        worker_id: Identity of the worker slot (0-based).
        host: Target hostname.
        request_count: Number of request/response cycles to attempt.
        total_latency: Sum of latencies in seconds of successful cycles.
        succeeded: Cycles that received response bytes.
        failed: Cycles abandoned because of a socket error.
    """

    worker_id: int
    host: str
    request_count: int
    total_latency: float = 0.0
    succeeded: int = 0
    failed: int = 0

    def record_success(self, latency: float) -> None:
        """Add the latency of a completed request/response pair."""
        self.total_latency += latency
        self.succeeded += 1

    def record_failure(self, count: int = 1) -> None:
        """Count abandoned iterations."""
        self.failed += count


@dataclass(frozen=True)
class BenchmarkReport:
    """Aggregated result of a benchmark run.

    Average latency and throughput are computed against the nominal
    request count (workers x requests per worker), not the number of
    requests that actually succeeded. ``succeeded_requests`` and
    ``failed_requests`` expose the difference.

    Attributes:
        worker_count: Number of workers that were launched.
        requests_per_worker: Configured requests per worker.
        total_latency: Sum of latencies in seconds across joined workers.
        average_latency: ``total_latency`` / nominal request count.
        throughput: Nominal request count / ``total_latency``.
        succeeded_requests: Requests that received response bytes.
        failed_requests: Requests abandoned by joined workers.
        failed_workers: Ids of workers that could not be joined.
    """

    worker_count: int
    requests_per_worker: int
    total_latency: float
    average_latency: float
    throughput: float
    succeeded_requests: int = 0
    failed_requests: int = 0
    failed_workers: tuple[int, ...] = field(default_factory=tuple)

    @property
    def total_requests(self) -> int:
        """Nominal request count: workers x requests per worker."""
        return self.worker_count * self.requests_per_worker

"""Thread-pool coordinator: spawn every worker, then join them all."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from httpbench._internal.errors import JoinError
from httpbench._internal.logging import get_logger
from httpbench.engine.resolver import resolve_address
from httpbench.engine.worker import run_worker
from httpbench.metrics.models import WorkerTask

if TYPE_CHECKING:
    from collections.abc import Callable
    from concurrent.futures import Future

    from httpbench._internal.config import BenchConfig
    from httpbench.engine.worker import Resolver

logger = get_logger("engine.coordinator")

# Used when the core count cannot be determined.
FALLBACK_CPU_COUNT = 1


def detect_cpu_count() -> int | None:
    """Return the number of processing cores, or None if unknown."""
    return os.cpu_count()


def resolve_worker_count(max_workers: int, cpu_count: int | None) -> int:
    """Compute the worker count from the ceiling and detected cores.

    Args:
        max_workers: Configured ceiling.
        cpu_count: Detected cores; None or non-positive means unknown.

    Returns:
        ``min(max_workers, cores)``, never less than 1.
    """
    cores = cpu_count if cpu_count is not None and cpu_count > 0 else FALLBACK_CPU_COUNT
    return max(1, min(max_workers, cores))


@dataclass
class PoolResult:
    """Outcome of the join-all barrier.

    Attributes:
        tasks: Tasks of workers that were joined successfully.
        failed_workers: Ids of workers whose result could not be retrieved.
    """

    tasks: list[WorkerTask] = field(default_factory=list)
    failed_workers: list[int] = field(default_factory=list)


class Coordinator:
    """Runs one blocking worker per slot and waits for all of them.

    Each worker owns its ``WorkerTask`` exclusively while running; the
    coordinator reads the tasks back only after the join barrier.

    Attributes:
        config: Benchmark configuration.
        num_workers: Number of workers that will be launched.
    """

    def __init__(
        self,
        config: BenchConfig,
        *,
        cpu_count: Callable[[], int | None] = detect_cpu_count,
        resolver: Resolver = resolve_address,
    ) -> None:
        """Initialize the coordinator.

        Args:
            config: Benchmark configuration.
            cpu_count: Provider of the available core count.
            resolver: Address resolver handed to every worker.
        """
        self.config = config
        self.num_workers = resolve_worker_count(config.max_workers, cpu_count())
        self._resolver = resolver

    @property
    def nominal_requests(self) -> int:
        """Workers x requests per worker, as configured."""
        return self.num_workers * self.config.requests_per_worker

    def build_tasks(self) -> list[WorkerTask]:
        """Create one task per worker slot, differing only by id."""
        return [
            WorkerTask(
                worker_id=i,
                host=self.config.host,
                request_count=self.config.requests_per_worker,
            )
            for i in range(self.num_workers)
        ]

    def run(self) -> PoolResult:
        """Launch all workers concurrently and block until every one ends.

        Returns:
            PoolResult with the joined tasks and any workers that failed.
        """
        tasks = self.build_tasks()
        logger.info(
            "Starting %d workers, %d requests each, host=%s",
            self.num_workers,
            self.config.requests_per_worker,
            self.config.host,
        )

        futures: dict[int, Future[WorkerTask]] = {}
        result = PoolResult()

        with ThreadPoolExecutor(
            max_workers=self.num_workers,
            thread_name_prefix="httpbench-worker",
        ) as executor:
            for task in tasks:
                try:
                    futures[task.worker_id] = executor.submit(
                        run_worker,
                        task,
                        port=self.config.port,
                        timeout=self.config.request_timeout,
                        resolver=self._resolver,
                        buffer_size=self.config.buffer_size,
                    )
                except RuntimeError as exc:
                    # The thread for this slot never started; the others still run.
                    self._record_join_failure(
                        result, JoinError(task.worker_id, f"could not start: {exc}")
                    )
            wait(futures.values())

        for worker_id, future in futures.items():
            try:
                result.tasks.append(_join(worker_id, future))
            except JoinError as exc:
                self._record_join_failure(result, exc)

        logger.info(
            "All workers joined: %d ok, %d failed",
            len(result.tasks),
            len(result.failed_workers),
        )
        return result

    @staticmethod
    def _record_join_failure(result: PoolResult, exc: JoinError) -> None:
        logger.error("%s", exc, extra={"worker_id": exc.worker_id})
        result.failed_workers.append(exc.worker_id)


def _join(worker_id: int, future: Future[WorkerTask]) -> WorkerTask:
    """Retrieve a finished worker's task.

    Raises:
        JoinError: If the worker raised instead of returning its task.
    """
    exc = future.exception()
    if exc is not None:
        raise JoinError(worker_id, f"{type(exc).__name__}: {exc}") from exc
    return future.result()

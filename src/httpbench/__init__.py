"""httpbench: a minimal concurrent HTTP GET benchmark."""

from __future__ import annotations

from httpbench._internal.config import BenchConfig, build_config
from httpbench.engine.coordinator import Coordinator, PoolResult
from httpbench.engine.resolver import ResolvedAddress, resolve_address
from httpbench.engine.worker import run_worker
from httpbench.metrics.aggregator import aggregate, render_table
from httpbench.metrics.models import BenchmarkReport, WorkerTask

__version__ = "0.1.0"

__all__ = [
    "BenchConfig",
    "BenchmarkReport",
    "Coordinator",
    "PoolResult",
    "ResolvedAddress",
    "WorkerTask",
    "aggregate",
    "build_config",
    "render_table",
    "resolve_address",
    "run_worker",
]

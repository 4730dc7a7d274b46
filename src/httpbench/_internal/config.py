"""Benchmark configuration and invocation-argument normalisation."""

from __future__ import annotations

import re
from dataclasses import dataclass

from httpbench._internal.errors import ArgumentError, ConfigError

HTTP_PORT = 80
DEFAULT_REQUESTS_PER_WORKER = 10
DEFAULT_MAX_WORKERS = 128
DEFAULT_TIMEOUT = 30.0
RECV_BUFFER_SIZE = 4096

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class BenchConfig:
    """Settings for one benchmark run.

    Attributes:
        host: Hostname or IP literal to target.
        requests_per_worker: Sequential requests each worker performs.
        max_workers: Ceiling on the worker count; the detected core count
            may lower it further.
        port: TCP port requests are sent to.
        request_timeout: Socket timeout in seconds per operation, or None
            to keep the network stack's default blocking behaviour.
        buffer_size: Size of the single receive issued per request.
    """

    host: str
    requests_per_worker: int = DEFAULT_REQUESTS_PER_WORKER
    max_workers: int = DEFAULT_MAX_WORKERS
    port: int = HTTP_PORT
    request_timeout: float | None = DEFAULT_TIMEOUT
    buffer_size: int = RECV_BUFFER_SIZE


def parse_requests_per_worker(raw: str | int | None) -> int:
    """Interpret the optional requests-per-worker argument.

    Parsing is lenient: a leading integer is used when present
    (``"12abc"`` gives 12), and anything missing, non-numeric or
    non-positive silently becomes the default.

    Args:
        raw: Argument as given on the command line, or None if omitted.

    Returns:
        A positive request count.
    """
    if raw is None:
        return DEFAULT_REQUESTS_PER_WORKER
    if isinstance(raw, int):
        value = raw
    else:
        match = _LEADING_INT.match(raw)
        if match is None:
            return DEFAULT_REQUESTS_PER_WORKER
        value = int(match.group(1))
    if value <= 0:
        return DEFAULT_REQUESTS_PER_WORKER
    return value


def build_config(
    host: str | None,
    requests_arg: str | int | None = None,
    *,
    max_workers: int = DEFAULT_MAX_WORKERS,
    timeout: float | None = DEFAULT_TIMEOUT,
    port: int = HTTP_PORT,
) -> BenchConfig:
    """Build a validated ``BenchConfig`` from invocation arguments.

    Args:
        host: Target host. Required.
        requests_arg: Raw requests-per-worker argument.
        max_workers: Worker ceiling, must be >= 1.
        timeout: Per-operation socket timeout in seconds. ``0`` or None
            disables the timeout.
        port: TCP port to connect to.

    Returns:
        Populated BenchConfig instance.

    Raises:
        ArgumentError: If the host is missing or blank.
        ConfigError: If an option has an invalid value.
    """
    if host is None or not host.strip():
        msg = "a target host is required"
        raise ArgumentError(msg)

    if max_workers < 1:
        msg = f"max workers must be >= 1, got: {max_workers}"
        raise ConfigError(msg)

    if timeout is not None and timeout < 0:
        msg = f"timeout must not be negative, got: {timeout}"
        raise ConfigError(msg)

    return BenchConfig(
        host=host.strip(),
        requests_per_worker=parse_requests_per_worker(requests_arg),
        max_workers=max_workers,
        port=port,
        request_timeout=timeout or None,
    )

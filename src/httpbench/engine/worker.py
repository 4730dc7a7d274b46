"""Blocking request worker: one fresh TCP connection per GET request."""

from __future__ import annotations

import socket
import time
from typing import TYPE_CHECKING

from httpbench._internal.config import HTTP_PORT, RECV_BUFFER_SIZE
from httpbench._internal.errors import (
    ConnectError,
    ReceiveError,
    RequestError,
    ResolutionError,
    SendError,
)
from httpbench._internal.logging import get_logger
from httpbench.engine.resolver import resolve_address

if TYPE_CHECKING:
    from collections.abc import Callable

    from httpbench.engine.resolver import ResolvedAddress
    from httpbench.metrics.models import WorkerTask

    Resolver = Callable[[str, int], ResolvedAddress]

logger = get_logger("engine.worker")


def build_request(host: str) -> bytes:
    """Return the literal HTTP/1.1 request sent on every connection."""
    return f"GET / HTTP/1.1\r\nHost: {host}\r\nConnection: close\r\n\r\n".encode()


def run_worker(
    task: WorkerTask,
    *,
    port: int = HTTP_PORT,
    timeout: float | None = None,
    resolver: Resolver = resolve_address,
    buffer_size: int = RECV_BUFFER_SIZE,
) -> WorkerTask:
    """Execute every request/response cycle of ``task``.

    The host is resolved once; each iteration then opens a new
    connection, sends the request, waits for the first response bytes
    and closes the connection. A failed iteration is logged and skipped,
    never retried.

    Args:
        task: Task owned by this worker. Updated in place.
        port: TCP port to connect to.
        timeout: Per-operation socket timeout in seconds, or None.
        resolver: Callable turning ``(host, port)`` into a ResolvedAddress.
        buffer_size: Size of the single receive issued per request.

    Returns:
        The same task, with latency and counters filled in.
    """
    try:
        address = resolver(task.host, port)
    except ResolutionError as exc:
        logger.error(
            "Worker %d: %s; skipping all %d requests",
            task.worker_id,
            exc,
            task.request_count,
            extra={"worker_id": task.worker_id, "operation": "getaddrinfo"},
        )
        task.record_failure(task.request_count)
        return task

    payload = build_request(task.host)

    for i in range(task.request_count):
        try:
            latency = _timed_exchange(address, payload, timeout, buffer_size)
        except RequestError as exc:
            logger.error(
                "Worker %d: request %d: %s",
                task.worker_id,
                i,
                exc,
                extra={"worker_id": task.worker_id, "operation": exc.operation},
            )
            task.record_failure()
            continue
        task.record_success(latency)

    logger.debug(
        "Worker %d finished: %d ok, %d failed, %.5fs total latency",
        task.worker_id,
        task.succeeded,
        task.failed,
        task.total_latency,
    )
    return task


def _timed_exchange(
    address: ResolvedAddress,
    payload: bytes,
    timeout: float | None,
    buffer_size: int,
) -> float:
    """Perform one connect/send/receive cycle.

    The clock starts right before the send and stops right after the
    first receive returns data. The response is not read further.

    Args:
        address: Resolved target.
        payload: Request bytes.
        timeout: Per-operation socket timeout in seconds, or None.
        buffer_size: Maximum bytes accepted by the receive.

    Returns:
        Latency in seconds.

    Raises:
        ConnectError: If the socket cannot be created or connected.
        SendError: If the request cannot be sent.
        ReceiveError: If the receive fails or the peer closes without data.
    """
    family, sock_type, proto, _canonname, sockaddr = address.primary

    try:
        sock = socket.socket(family, sock_type, proto)
    except OSError as exc:
        raise ConnectError(str(exc), operation="socket") from exc

    with sock:
        sock.settimeout(timeout)
        try:
            sock.connect(sockaddr)
        except OSError as exc:
            raise ConnectError(str(exc)) from exc

        start = time.perf_counter()
        try:
            sock.sendall(payload)
        except OSError as exc:
            raise SendError(str(exc)) from exc

        try:
            data = sock.recv(buffer_size)
        except OSError as exc:
            raise ReceiveError(str(exc)) from exc
        end = time.perf_counter()

    if not data:
        msg = "connection closed before any response bytes arrived"
        raise ReceiveError(msg)

    return end - start

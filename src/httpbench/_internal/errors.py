"""Custom exception hierarchy for httpbench."""

from __future__ import annotations


class HttpBenchError(Exception):
    """Base exception for all httpbench errors.

    Every error raised by the benchmark inherits from this class, so a
    single except clause can catch anything httpbench-specific.
    """


class ConfigError(HttpBenchError):
    """Raised when a benchmark option has an invalid value.

    Examples:
        - ``--max-workers`` is less than 1.
        - ``--timeout`` is negative.
    """


class ArgumentError(ConfigError):
    """Raised when a required invocation argument is missing.

    The only required argument is the target host.
    """


class ResolutionError(HttpBenchError):
    """Raised when a hostname cannot be turned into a TCP address.

    Attributes:
        host: The hostname that failed to resolve.
        reason: Description of the underlying resolver failure.
    """

    def __init__(self, host: str, reason: str) -> None:
        self.host = host
        self.reason = reason
        super().__init__(f"Could not resolve {host!r}: {reason}")


class RequestError(HttpBenchError):
    """Base for failures inside a single request/response iteration.

    Attributes:
        operation: Socket operation that failed (socket, connect, send, recv).
        reason: Description of the underlying system error.
    """

    operation = "request"

    def __init__(self, reason: str, *, operation: str | None = None) -> None:
        if operation is not None:
            self.operation = operation
        self.reason = reason
        super().__init__(f"{self.operation} failed: {reason}")


class ConnectError(RequestError):
    """Raised when a socket cannot be created or connected."""

    operation = "connect"


class SendError(RequestError):
    """Raised when the request bytes cannot be sent."""

    operation = "send"


class ReceiveError(RequestError):
    """Raised when no response bytes arrive."""

    operation = "recv"


class JoinError(HttpBenchError):
    """Raised when the coordinator cannot retrieve a worker's result.

    Attributes:
        worker_id: Identifier of the worker that could not be joined.
    """

    def __init__(self, worker_id: int, reason: str) -> None:
        self.worker_id = worker_id
        self.reason = reason
        super().__init__(f"Failed to join worker {worker_id}: {reason}")

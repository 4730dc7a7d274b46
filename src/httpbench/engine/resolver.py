"""Hostname resolution for the request workers."""

from __future__ import annotations

import socket
from dataclasses import dataclass

from httpbench._internal.config import HTTP_PORT
from httpbench._internal.errors import ResolutionError
from httpbench._internal.logging import get_logger

logger = get_logger("engine.resolver")

# (family, type, proto, canonname, sockaddr) as returned by getaddrinfo.
AddrInfo = tuple[socket.AddressFamily, socket.SocketKind, int, str, tuple]


@dataclass(frozen=True)
class ResolvedAddress:
    """Connectable addresses for a host and port.

    Attributes:
        host: The hostname that was resolved.
        port: The TCP port.
        entries: ``getaddrinfo`` results, IPv4 and/or IPv6, TCP only.
    """

    host: str
    port: int
    entries: tuple[AddrInfo, ...]

    @property
    def primary(self) -> AddrInfo:
        """The entry every request connects to."""
        return self.entries[0]


def resolve_address(host: str, port: int = HTTP_PORT) -> ResolvedAddress:
    """Resolve ``host`` to TCP socket addresses on ``port``.

    Args:
        host: Hostname or IP literal.
        port: TCP port.

    Returns:
        ResolvedAddress with at least one entry.

    Raises:
        ResolutionError: If the name cannot be resolved.
    """
    try:
        entries = socket.getaddrinfo(
            host, port, family=socket.AF_UNSPEC, type=socket.SOCK_STREAM
        )
    except (OSError, UnicodeError) as exc:
        raise ResolutionError(host, str(exc)) from exc

    if not entries:
        raise ResolutionError(host, "no addresses returned")

    logger.debug("Resolved %s:%d to %d address(es)", host, port, len(entries))
    return ResolvedAddress(host=host, port=port, entries=tuple(entries))

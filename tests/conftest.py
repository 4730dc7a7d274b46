"""Shared test fixtures for the httpbench test suite."""

from __future__ import annotations

import asyncio
import logging
import socket
import threading
from typing import TYPE_CHECKING

import pytest
from aiohttp import web

if TYPE_CHECKING:
    from collections.abc import Iterator


# =============================================================================
# Pytest configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    for item in items:
        test_path = str(item.fspath)
        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in test_path:
            item.add_marker(pytest.mark.e2e)


@pytest.fixture(autouse=True)
def _reset_httpbench_logger() -> Iterator[None]:
    """Undo ``setup_logging`` so caplog works and no stale stream is kept."""
    yield
    logger = logging.getLogger("httpbench")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# =============================================================================
# Network utilities
# =============================================================================


def _get_free_port() -> int:
    """Find an available port on localhost."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def free_port() -> int:
    """A localhost port with nothing listening on it."""
    return _get_free_port()


# =============================================================================
# HTTP server running in a background thread
# =============================================================================


async def _root_handler(request: web.Request) -> web.Response:
    """Reply immediately with a minimal response."""
    return web.Response(text="ok")


def _create_app() -> web.Application:
    app = web.Application()
    app.router.add_get("/", _root_handler)
    return app


@pytest.fixture
def http_server() -> Iterator[int]:
    """aiohttp server on 127.0.0.1 in a background thread.

    Yields the port it listens on.
    """
    port = _get_free_port()
    started = threading.Event()
    loop_holder: list[asyncio.AbstractEventLoop] = []

    def _thread_target() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        runner = web.AppRunner(_create_app())
        loop.run_until_complete(runner.setup())
        site = web.TCPSite(runner, "127.0.0.1", port)
        loop.run_until_complete(site.start())
        loop_holder.append(loop)
        started.set()
        loop.run_forever()
        loop.run_until_complete(runner.cleanup())
        loop.close()

    thread = threading.Thread(target=_thread_target, daemon=True)
    thread.start()
    started.wait(timeout=5.0)

    yield port

    if loop_holder:
        loop_holder[0].call_soon_threadsafe(loop_holder[0].stop)
    thread.join(timeout=5.0)


# =============================================================================
# Raw socket servers for failure modes
# =============================================================================


class _SocketServer:
    """Accept loop on a background thread with a per-connection behaviour."""

    def __init__(self, on_connection: str) -> None:
        self._on_connection = on_connection
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(64)
        self._sock.settimeout(0.1)
        self.port: int = self._sock.getsockname()[1]
        self.connections = 0
        self._stop = threading.Event()
        self._held: list[socket.socket] = []
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def __enter__(self) -> _SocketServer:
        self._thread.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._stop.set()
        self._thread.join(timeout=5.0)
        for conn in self._held:
            conn.close()
        self._sock.close()

    def _serve(self) -> None:
        while not self._stop.is_set():
            try:
                conn, _addr = self._sock.accept()
            except TimeoutError:
                continue
            self.connections += 1
            if self._on_connection == "close":
                conn.close()
            else:
                # Hold the connection open without ever answering.
                self._held.append(conn)


@pytest.fixture
def closing_server() -> Iterator[_SocketServer]:
    """Server that accepts each connection and closes it without replying."""
    with _SocketServer("close") as server:
        yield server


@pytest.fixture
def silent_server() -> Iterator[_SocketServer]:
    """Server that accepts connections and never sends anything."""
    with _SocketServer("hold") as server:
        yield server

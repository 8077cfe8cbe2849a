"""
Server lifecycle: start the API against a database and shut it down again.

``run_server`` and ``close_server`` are what the integration tests use; running
this module starts the API in the foreground.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

import uvicorn

from blog_api.app import app
from blog_api.config import get_settings
from blog_api.dependencies import close_db_client, connect_db

logger = logging.getLogger(__name__)

STARTUP_TIMEOUT_SECONDS = 10.0

_server: Optional[uvicorn.Server] = None
_thread: Optional[threading.Thread] = None


def _build_server(host: str, port: int) -> uvicorn.Server:
    settings = get_settings()
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
        lifespan="on",
    )
    return uvicorn.Server(config)


def run_server(
    database_url: str | None = None,
    *,
    host: str | None = None,
    port: int | None = None,
) -> uvicorn.Server:
    """
    Connect to ``database_url`` and serve the API from a background thread.

    Blocks until the server accepts connections. Raises RuntimeError if a
    server is already running or if it fails to start.
    """
    global _server, _thread
    if _server is not None:
        raise RuntimeError("Server is already running")

    settings = get_settings()
    host = host or settings.host
    port = port if port is not None else settings.port

    connect_db(database_url)
    server = _build_server(host, port)
    thread = threading.Thread(target=server.run, name="blog-api-server", daemon=True)
    thread.start()

    deadline = time.monotonic() + STARTUP_TIMEOUT_SECONDS
    while not server.started:
        if not thread.is_alive() or time.monotonic() > deadline:
            server.should_exit = True
            thread.join(timeout=1)
            close_db_client()
            raise RuntimeError(f"Server failed to start on {host}:{port}")
        time.sleep(0.05)

    logger.info("Your app is listening on %s:%d", host, port)
    _server, _thread = server, thread
    return server


def close_server() -> None:
    """Stop the running server and close its database connection."""
    global _server, _thread
    if _server is None:
        return
    logger.info("Closing server")
    _server.should_exit = True
    if _thread is not None:
        _thread.join(timeout=STARTUP_TIMEOUT_SECONDS)
    _server, _thread = None, None
    close_db_client()


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )
    connect_db()
    try:
        _build_server(settings.host, settings.port).run()
    finally:
        close_db_client()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

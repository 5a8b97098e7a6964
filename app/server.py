"""HTTP listener and process runner with graceful shutdown support."""

import logging
import threading
import time
from typing import Any

from flask import Flask
from paste.translogger import TransLogger  # type: ignore[import-untyped]
from waitress import create_server

from app.config import Settings
from app.utils.lifecycle_coordinator import LifecycleEvent

logger = logging.getLogger(__name__)


class Listener:
    """A bound TCP listener serving the WSGI application through waitress.

    The socket is bound when the listener is created, so a port conflict
    raises ``OSError`` before anything is logged or served.
    """

    def __init__(self, app: Flask, host: str, port: int, threads: int):
        wsgi = TransLogger(app, setup_console_handler=False)
        self._server: Any = create_server(wsgi, host=host, port=port, threads=threads)
        self._threads = threads

    @property
    def port(self) -> int:
        return int(self._server.effective_port)

    def serve_forever(self) -> None:
        logger.info(f"Using Waitress WSGI server with {self._threads} threads")
        self._server.run()

    def drain(self, timeout: float) -> bool:
        """Stop accepting connections and wait for in-flight requests.

        Returns:
            True when every worker went idle within ``timeout`` seconds
        """
        self._server.accepting = False
        dispatcher = self._server.task_dispatcher
        deadline = time.monotonic() + timeout

        while dispatcher.active_count > 0 or dispatcher.queue:
            if time.monotonic() >= deadline:
                return False
            time.sleep(0.05)

        return True

    def close(self) -> None:
        self._server.close()
        self._server.task_dispatcher.shutdown()


def create_listener(app: Flask, settings: Settings) -> Listener:
    """Bind the HTTP listener for the application.

    Raises:
        OSError: if the address cannot be bound, e.g. the port is in use
    """
    listener = Listener(
        app, settings.host, settings.port, settings.waitress_threads
    )
    logger.info(f"Server running on port {listener.port}")
    return listener


def run(settings: "Settings | None" = None) -> None:
    """Create the application, bind the listener and serve until shutdown."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # Import here to avoid circular imports
    from app import create_app

    if settings is None:
        settings = Settings.load()

    app = create_app(settings)
    listener = create_listener(app, settings)

    lifecycle_coordinator = app.container.lifecycle_coordinator()
    lifecycle_coordinator.initialize()

    stopped = threading.Event()

    def signal_shutdown(lifecycle_event: LifecycleEvent) -> None:
        if lifecycle_event == LifecycleEvent.AFTER_SHUTDOWN:
            stopped.set()

    lifecycle_coordinator.register_lifecycle_notification(signal_shutdown)
    lifecycle_coordinator.register_shutdown_waiter("http-listener", listener.drain)

    failures: list[Exception] = []

    def serve() -> None:
        try:
            listener.serve_forever()
        except Exception as e:
            logger.error(f"HTTP listener failed: {e}")
            failures.append(e)
            stopped.set()

    # Serve in a daemon thread so the lifecycle coordinator controls exit
    thread = threading.Thread(target=serve, name="http-listener", daemon=True)
    thread.start()

    stopped.wait()

    listener.close()

    if failures:
        raise failures[0]

    logger.info("Server stopped")

# src/focusboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts the Pomodoro ticker thread,
then runs the console REPL in the main thread.
"""

from __future__ import annotations

import contextlib
import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import print_timer_notification, run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.ticker.stop()
        state.ticker.join(timeout=5.0)
    except Exception:
        logger.exception("Failed to stop the Pomodoro ticker.")

    # The SQLite backend uses short-lived connections per call; close() is a no-op hook.
    backend = state.store.backend
    if hasattr(backend, "close"):
        try:
            backend.close()
        except Exception:
            logger.debug("Store close failed.", exc_info=True)


def main() -> None:
    settings = get_settings()

    log_file = setup_logging(log_dir=settings.data_dir, console_level=settings.log_level)

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    state = create_initial_state(settings=settings, on_notify=print_timer_notification)
    state.ticker.launch()

    stop_main = threading.Event()

    def _handle_signal(signum, _frame) -> None:
        # Surface SIGTERM like Ctrl+C so the blocking input() returns.
        logger.info("Signal %s received, shutting down...", signum)
        stop_main.set()
        raise KeyboardInterrupt

    # Some platforms do not support SIGTERM.
    with contextlib.suppress(ValueError, OSError, AttributeError):
        signal.signal(signal.SIGTERM, _handle_signal)

    try:
        if settings.console_enabled:
            run_console_loop(state)
            stop_main.set()
        else:
            logger.info("Console disabled. Nothing else to run; press Ctrl+C to stop.")
            with contextlib.suppress(KeyboardInterrupt):
                stop_main.wait()
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()

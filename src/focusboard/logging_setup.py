# src/focusboard/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "focusboard.log"

# Our own loggers that would flood the REPL below this level.
_CONSOLE_FLOORS = {
    # One record per tick from the countdown thread.
    "focusboard.timer.ticker": logging.WARNING,
}


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the interactive console readable.

    focusboard.* records pass (subject to _CONSOLE_FLOORS); everything else,
    py.warnings included, only at ERROR+.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if not name.startswith("focusboard."):
            return record.levelno >= logging.ERROR
        for prefix, floor in _CONSOLE_FLOORS.items():
            if name.startswith(prefix):
                return record.levelno >= floor
        return True


def resolve_level(level: str | int, default: int = logging.INFO) -> int:
    """'debug' / 'INFO' / 20 -> logging level number; unknown names give `default`."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).strip().upper())
    return value if isinstance(value, int) else default


def setup_logging(
    *,
    log_dir: str | Path = ".local/focusboard",
    console_level: str | int = logging.INFO,
    file_level: str | int = logging.DEBUG,
) -> Path:
    """
    Send everything to <log_dir>/focusboard.log and a filtered view to stderr.

    Call once at startup, before the first record is logged. Returns the log
    file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolve_level(console_level))
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(resolve_level(file_level, logging.DEBUG))
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # warnings.warn(...) -> 'py.warnings' logger
    logging.captureWarnings(True)
    return log_file

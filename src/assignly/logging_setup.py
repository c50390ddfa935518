# src/assignly/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - allow assignly logs
    - suppress HTTP client chatter (httpx/httpcore) unless ERROR+
    - show Python warnings (captured as 'py.warnings') at WARNING+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == "assignly" or name.startswith("assignly."):
            return True

        # warnings.warn(...) from our own code or deps: always worth seeing.
        if name == "py.warnings":
            return record.levelno >= logging.WARNING

        # Any other 3rd party: only errors to console.
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/assignly",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Configure logging with:
    - Console handler: readable + filtered
    - File handler: full logs for debugging

    Call this ONCE, very early (before first logger.info).
    Returns the path of the log file.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "assignly.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # Route warnings.warn(...) into logging as 'py.warnings'
    logging.captureWarnings(True)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file

"""
Logging setup for the application.

``setup_logging`` configures the root logger with a console handler and
wires the ``app.errlog`` logger to an append-only file. The error log is
where throttled login attempts are recorded.
"""
import logging
from pathlib import Path
from typing import Optional

ERRLOG_LOGGER = "app.errlog"

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", err_log_path: Optional[str] = None) -> None:
    """Configure root and error-log loggers.

    Safe to call more than once: handlers are only attached when the
    target logger has none yet.
    """
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not root.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    errlog = logging.getLogger(ERRLOG_LOGGER)
    if err_log_path and not errlog.handlers:
        log_path = Path(err_log_path).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        # One tab separated line per event
        file_handler.setFormatter(logging.Formatter("%(asctime)s\t%(message)s", datefmt=_DATEFMT))
        errlog.addHandler(file_handler)

"""
Basic logging configuration for the application.

The ``setup_logging`` function configures the root logger with a
console and an optional file handler.  Request lines are emitted by the
HTTP middleware under the ``classcart_api.requests`` logger, whose
level is set separately so they can be silenced without hiding
application messages.  Because the app logs every request itself,
uvicorn's own access log is lowered to warnings to avoid duplicates.
"""

import logging
from pathlib import Path
from typing import Optional


REQUEST_LOGGER_NAME = "classcart_api.requests"
FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_request_logger(level: str = "INFO") -> logging.Logger:
    """Set the level of the request logger and quiet uvicorn's access log."""
    request_logger = logging.getLogger(REQUEST_LOGGER_NAME)
    request_logger.setLevel(_level(level))
    request_logger.propagate = True
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    return request_logger


def setup_logging(level: str = "INFO", logfile: Optional[str] = None, request_level: str = "INFO") -> None:
    """Configure root and request loggers.

    The request logger is configured on every call.  Root handlers are
    attached only if none exist yet, so tests and repeated
    ``create_app`` calls do not duplicate output.

    Parameters
    ----------
    level : str
        Root logging level name (e.g. ``"DEBUG"``).  Case insensitive;
        unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to an additional log file.
    request_level : str
        Level for the per-request log lines.
    """
    configure_request_logger(request_level)

    root = logging.getLogger()
    if root.handlers:
        return
    root.setLevel(_level(level))

    formatter = logging.Formatter(fmt=FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

"""
Logging configuration for the Product Rating API.

``setup_logging`` attaches the service's own console handler (and an
optional file handler) to the root logger and applies the configured
level to the root logger and to uvicorn's loggers, so request logs and
service logs share one level.  Handlers installed by this module are
marked; calling ``setup_logging`` again only adjusts the level and
never stacks duplicates, while handlers installed by someone else
(pytest, an embedding process) are left alone.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn configures these itself; keep them at the service's level.
SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_MARKER = "_product_rating_handler"


def _own_handlers(logger: logging.Logger) -> list:
    return [h for h in logger.handlers if getattr(h, _MARKER, False)]


def _mark(handler: logging.Handler, formatter: logging.Formatter) -> logging.Handler:
    handler.setFormatter(formatter)
    setattr(handler, _MARKER, True)
    return handler


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> int:
    """Configure the root logger for the service.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.  Unknown names fall back
        to ``INFO``.
    logfile : Optional[str]
        File to log to in addition to the console, resolved relative
        to the current working directory.  Only honoured the first
        time handlers are installed.

    Returns
    -------
    int
        The numeric level that was applied.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    root = logging.getLogger()
    root.setLevel(numeric_level)
    for name in SERVER_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level)

    if _own_handlers(root):
        return numeric_level

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    root.addHandler(_mark(logging.StreamHandler(), formatter))
    if logfile:
        log_path = Path(logfile).resolve()
        root.addHandler(_mark(logging.FileHandler(log_path, encoding="utf-8"), formatter))
    return numeric_level

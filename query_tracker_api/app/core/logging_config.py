"""
Logging for the Query Tracker service.

Query mutations, store lifecycle events and rejected requests are
logged by the ``query_tracker_api`` package loggers; the uvicorn
loggers carry the access log.  ``setup_logging`` brings all of them
to the configured ``LOG_LEVEL`` on every call, and attaches the
console (and optional ``LOG_FILE``) handlers to the root logger only
when nothing else has configured it yet.
"""

import logging
from pathlib import Path
from typing import Optional

SERVICE_LOGGERS = ("query_tracker_api", "uvicorn", "uvicorn.error", "uvicorn.access")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> int:
    """Apply ``level`` to the service loggers and install handlers once.

    Parameters
    ----------
    level : str
        Logging level name, case insensitive.  Unknown names fall back
        to ``INFO``.
    logfile : Optional[str]
        Also write records to this file when the root logger is
        configured here.

    Returns
    -------
    int
        The numeric level that was applied.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    for name in SERVICE_LOGGERS:
        logging.getLogger(name).setLevel(numeric_level)

    root = logging.getLogger()
    if root.handlers:
        # uvicorn, pytest or an earlier create_app already owns the handlers
        return numeric_level

    root.setLevel(numeric_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
    return numeric_level

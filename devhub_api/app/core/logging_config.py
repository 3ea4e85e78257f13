"""
Logging configuration for the DevHub API.

``setup_logging`` attaches a console handler (and a file handler when
``LOG_FILE`` is set) to the root logger.  Cache hits, upstream GitHub
calls and translated upstream errors are all logged by the services
through module loggers, so one root configuration covers them.

The function is idempotent: ``create_app`` runs once per app instance,
and the test-suite builds many apps in one process.
"""

import logging
from pathlib import Path
from typing import List, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers that are chatty below WARNING.  ``urllib3`` logs
# every connection ``requests`` opens to api.github.com.
NOISY_LOGGERS = ("urllib3",)


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``).  Case insensitive;
        unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File to append log records to.  Containers usually collect
        stdout only, so no file is written unless a path is given.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root.setLevel(numeric_level)

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    # At DEBUG the per-connection records help diagnose upstream timeouts.
    if numeric_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

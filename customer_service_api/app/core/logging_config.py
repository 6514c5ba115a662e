"""
Logging configuration for the Customer Service API.

Handlers are attached to the ``customer_service_api`` package logger
rather than the root logger, so uvicorn and other libraries keep their
own configuration.  Every module logs through
``logging.getLogger(__name__)`` and therefore ends up here.

Level and log file default to ``LOG_LEVEL`` and ``LOG_FILE`` from
``core.config``.  Calling ``setup_logging`` again replaces the handlers
installed by the previous call instead of stacking new ones.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import settings

PACKAGE_LOGGER = "customer_service_api"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Marks handlers owned by this module.
_HANDLER_NAME = "customer_service_api.handler"


def setup_logging(level: Optional[str] = None, logfile: Optional[str] = None) -> logging.Logger:
    """Configure the package logger and return it.

    Parameters
    ----------
    level : Optional[str]
        Logging level name, case insensitive.  Defaults to
        ``settings.log_level``; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File that receives a copy of every record.  Defaults to
        ``settings.log_file``; empty means console only.  Missing
        parent directories are created.
    """
    level = level or settings.log_level
    logfile = logfile if logfile is not None else settings.log_file

    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            logger.removeHandler(handler)
            handler.close()

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    handlers = [logging.StreamHandler()]
    if logfile:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger

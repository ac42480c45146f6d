"""Logging setup for the command line.

Library code only creates module loggers under the ``tapebf`` namespace;
handlers are attached here so embedding applications stay in control.
"""
from __future__ import annotations

import logging
import os
import sys
from typing import Optional

LOGGER_NAME = "tapebf"
ENV_LEVEL = "TAPEBF_LOG_LEVEL"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def level_for(verbosity: int, level: Optional[str] = None) -> int:
    """Resolve the effective level from an explicit name, the environment, or ``-v`` count."""
    name = level or os.environ.get(ENV_LEVEL)
    if name:
        resolved = logging.getLevelName(name.upper())
        if isinstance(resolved, int):
            return resolved
        raise ValueError(f"Unknown log level: {name}")
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def init_logging(verbosity: int = 0, level: Optional[str] = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level_for(verbosity, level))
    return logger

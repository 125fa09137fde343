"""Logging setup.

quickenv never logs to the terminal: stdout may be eval'd by the shell and
stderr carries the menus. With QUICKENV_DEBUG set, records go to
``<config dir>/debug.log``; otherwise they are dropped.
"""

from __future__ import annotations

import logging

from . import config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(debug: bool | None = None) -> logging.Logger:
    """Configure the ``quickenv`` logger once per process."""
    logger = logging.getLogger("quickenv")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = False

    if debug is None:
        debug = config.is_debug_enabled()

    if debug:
        try:
            config.ensure_dirs()
            handler: logging.Handler = logging.FileHandler(config.get_log_path(), encoding="utf-8")
        except OSError:
            handler = logging.NullHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.setLevel(logging.DEBUG)
    else:
        handler = logging.NullHandler()
        logger.setLevel(logging.WARNING)

    logger.addHandler(handler)
    return logger

"""
Loggers of the package all hang below the ``qkatas`` logger, which the
command line driver points at stderr (and optionally a file).
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

LOGGER_NAME = "qkatas"
DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def _handlers(log_file: Optional[Union[str, Path]]) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path))
    return handlers


def setup_logging(level: int = logging.INFO,
                  log_file: Optional[Union[str, Path]] = None,
                  format_string: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    Route the package's log records to stderr and, if given, ``log_file``.

    Calling it again replaces the handlers of the previous call.

    Returns:
        logging.Logger: The ``qkatas`` logger
    """
    root = logging.getLogger(LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string)
    for handler in _handlers(log_file):
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    return root


def get_logger(name: str) -> logging.Logger:
    """Child of the ``qkatas`` logger for a module's ``__name__``."""
    if name.split(".")[0] == LOGGER_NAME:
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")

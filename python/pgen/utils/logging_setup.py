"""
Logging configuration for the PGen command line.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(debug: bool = False, log_file: Optional[Union[str, Path]] = None) -> None:
    """
    Configure the ``pgen`` logger.

    Args:
        debug: Show debug messages on the console
        log_file: Also write every message, debug included, to this file
    """
    logger = logging.getLogger("pgen")
    logger.setLevel(logging.DEBUG)

    # Configuring twice (e.g. repeated CLI invocations in tests) must not duplicate output
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(logging.DEBUG if debug else logging.WARNING)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    logger.propagate = False

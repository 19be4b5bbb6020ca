"""Logging configuration for the application."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """
    Configure application logging.

    Installs a single stdout handler on the root logger. Safe to call more
    than once; later calls only adjust the level.
    """
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    logging.getLogger().setLevel(level.upper())

    # Request lines are noisy; the handlers log the events that matter
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

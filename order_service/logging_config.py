"""
Logging setup shared by every module of the order service.

Call ``setup_logging()`` once at startup, then obtain module loggers through
``get_logger(__name__)``.
"""

import logging
import sys

from order_service.config import settings


def setup_logging(level: str | None = None):
    """
    Configures the root logger: one stdout handler and a common line format
    (timestamp, level, logger name, message). Third-party SDK loggers are
    turned down to WARNING.
    """
    log_format = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger("stripe").setLevel(logging.WARNING)


def get_logger(name):
    return logging.getLogger(name)

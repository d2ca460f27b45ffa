"""
Logging utilities for the FastAPI application and Lambda handlers.

The Lambda runtime installs its own root handler before our code runs, so the
root configuration is forced to keep one consistent format everywhere.
"""

import logging
import sys

_NOISY_LOGGERS = ("botocore", "urllib3", "googleapiclient.discovery_cache")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with the service-wide format."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
        force=True,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure_logging"]

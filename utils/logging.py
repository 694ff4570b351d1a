"""Logging setup shared by the API process and the maintenance scripts."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Initialize root logging once with the shared format.

    ``level`` defaults to ``settings.log_level`` (``LOG_LEVEL`` in the environment).
    """
    if level is None:
        from config import settings

        level = settings.log_level
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # googleapiclient logs every discovery-cache miss at WARNING.
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)

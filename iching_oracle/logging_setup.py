from __future__ import annotations

import logging

LOG_FORMAT = "%(levelname)s: %(message)s"


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Configure root logging for the CLI; later calls replace earlier handlers."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))

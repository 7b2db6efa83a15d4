from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Root logger setup for the command line entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # urllib3 logs every connection at DEBUG; keep it quiet unless asked for.
    if level.upper() != "DEBUG":
        logging.getLogger("urllib3").setLevel(logging.WARNING)

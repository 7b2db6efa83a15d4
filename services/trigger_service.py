from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class OneShotTrigger:
    """
    Two-phase start guard backed by a zero-byte marker file.

    First invocation: marker absent -> create it, do not load.
    Any later invocation: marker present -> load.
    Only the file's existence matters; it is never removed here.
    """

    def __init__(self, marker_path: str | Path):
        self.marker_path = Path(marker_path)

    def should_run(self) -> bool:
        if self.marker_path.exists():
            logger.info("Trigger marker %s present; load proceeds", self.marker_path)
            return True

        self.marker_path.parent.mkdir(parents=True, exist_ok=True)
        self.marker_path.touch()
        logger.info("Trigger marker %s created; deferring load to the next run", self.marker_path)
        return False

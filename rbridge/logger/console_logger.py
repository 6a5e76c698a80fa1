"""Console logger writing to stderr."""

import logging
import sys
from typing import Optional

from .default_logger import DefaultLogger

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class ConsoleLogger(DefaultLogger):
    """DefaultLogger that installs its own stderr handler."""

    def __init__(self, name: str = "rbridge", level: int = logging.INFO, stream: Optional[object] = None):
        logger = logging.getLogger(name)
        logger.setLevel(level)
        if not any(getattr(h, "_rbridge_console", False) for h in logger.handlers):
            handler = logging.StreamHandler(stream or sys.stderr)
            handler.setFormatter(logging.Formatter(_FORMAT))
            handler._rbridge_console = True  # type: ignore[attr-defined]
            logger.addHandler(handler)
        logger.propagate = False
        super().__init__(name=name, logger=logger)

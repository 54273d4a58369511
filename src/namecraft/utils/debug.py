"""Logging setup for namecraft.

Modules log through ``logging.getLogger(__name__)``; setup_logger attaches one
stderr handler to the ``namecraft`` parent logger so all of them share it.
stdout is reserved for the JSON documents the front end reads.
Setting NAMECRAFT_DEBUG=1 lowers the level to DEBUG.
"""

import logging
import os
from typing import Optional

DEBUG_ON = os.getenv("NAMECRAFT_DEBUG", "0") == "1"

_logger: Optional[logging.Logger] = None


def setup_logger() -> logging.Logger:
    """Configure the ``namecraft`` logger once and return it."""
    global _logger
    if _logger is not None:
        return _logger
    logger = logging.getLogger("namecraft")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("[%(levelname)s] %(asctime)s %(name)s: %(message)s")
        )
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if DEBUG_ON else logging.INFO)
    _logger = logger
    return logger

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "[%(levelname)s] %(name)s - %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Attach a stdout handler to the root logger once; later calls only adjust the level."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if root_logger.handlers:
        return root_logger

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    return root_logger

"""Root logger configuration shared by the CLI and the API."""

from __future__ import annotations

import logging
import sys
from typing import Union

_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"

# Transport libraries log every request at INFO; one line per probe is noise.
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: Union[str, int] = "INFO") -> None:
    """Install a single stderr handler on the root logger."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))

    root_logger = logging.getLogger()
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

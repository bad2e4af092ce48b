"""
Root logger setup.
"""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    # basicConfig is a no-op when the root logger already has handlers
    # (uvicorn --reload, repeated lifespans in tests), so only the level is forced.
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level)

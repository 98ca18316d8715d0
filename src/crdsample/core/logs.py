#!/usr/bin/env python3
"""
Logging setup driven by the `logging` section of the configuration.
"""

import logging
from typing import Any, Dict

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(config: Dict[str, Any]) -> int:
    """
    Configure the root logger from `config['logging']['level']`.

    Unknown level names fall back to INFO. Returns the numeric level applied.
    """
    name = str(config.get("logging", {}).get("level", "INFO")).strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    return level

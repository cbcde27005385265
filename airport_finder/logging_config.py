"""Logging setup utilities."""
from __future__ import annotations

import logging
import os
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'


def resolve_level(debug: Optional[bool] = None) -> int:
    """``--debug`` wins, then AIRPORT_FINDER_DEBUG, then AIRPORT_FINDER_LOG_LEVEL."""
    if debug is None:
        debug = os.getenv('AIRPORT_FINDER_DEBUG', 'false').lower() == 'true'
    if debug:
        return logging.DEBUG
    level = logging.getLevelName(os.getenv('AIRPORT_FINDER_LOG_LEVEL', 'INFO').upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(debug: Optional[bool] = None) -> logging.Logger:
    logging.basicConfig(level=resolve_level(debug), format=LOG_FORMAT)
    return logging.getLogger('airport_finder')

"""
Logging setup for pixt.
Everything goes to stderr so stdout stays free for rendered output.
"""

import logging
import os
from collections.abc import Mapping

LEVEL_ENV = "PIXT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(verbosity: int = 0, environ: Mapping[str, str] = os.environ) -> int:
    """Map -q/-v counts to a level; PIXT_LOG_LEVEL wins when it names a real level."""
    if verbosity < 0:
        level = logging.ERROR
    elif verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    level_name = environ.get(LEVEL_ENV, "").strip().upper()
    named = logging.getLevelName(level_name) if level_name else None
    if isinstance(named, int):
        level = named
    return level


def setup_logging(verbosity: int = 0) -> None:
    logging.basicConfig(level=resolve_level(verbosity), format=LOG_FORMAT)

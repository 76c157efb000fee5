from __future__ import annotations

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LEVEL_ENV_FLAG = "CASHCAST_LOG_LEVEL"
DEFAULT_LEVEL = logging.WARNING


def resolve_level(verbose: bool = False) -> int:
    """--verbose wins, then CASHCAST_LOG_LEVEL, then WARNING."""
    if verbose:
        return logging.DEBUG
    env_level = os.environ.get(LEVEL_ENV_FLAG, "").strip().upper()
    if env_level:
        resolved = logging.getLevelName(env_level)
        if isinstance(resolved, int):
            return resolved
    return DEFAULT_LEVEL


def configure_logging(verbose: bool = False, console: Optional[Console] = None) -> int:
    level = resolve_level(verbose)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True)
    return level

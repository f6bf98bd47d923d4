"""
Logging setup for scripts.

Library modules only call `logger`; entry points decide where logs go.
"""

import sys
from typing import Optional

from loguru import logger

from study_core import config


def configure_logging(level: Optional[str] = None) -> None:
    """Replace loguru's default handler with a single stderr sink."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=(level or config.get_log_level()).upper(),
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )

# SPDX-License-Identifier: MIT
"""Log sink setup."""

import sys

from loguru import logger

from .config import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Replace loguru's default handler with a single stdout sink."""
    logger.remove()
    logger.add(sys.stdout, level=config.level, format=config.format)

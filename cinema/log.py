"""Loguru setup for the cinema core."""

import sys

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level> | {extra}"
)


def configure_logging(level: str = "INFO", serialize: bool = False) -> None:
    """Replace loguru's default sink with one stderr sink at `level`.

    With `serialize` each record is emitted as a JSON document instead.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.upper(),
        format=LOG_FORMAT,
        serialize=serialize,
        backtrace=False,
        diagnose=False,
        enqueue=False,
    )

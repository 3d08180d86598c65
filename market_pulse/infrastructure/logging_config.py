"""Logging setup: loguru everywhere, with uvicorn's stdlib loggers bridged in."""

import logging
import sys

from loguru import logger

_BRIDGED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi")
_bridge_installed = False


class _LoguruHandler(logging.Handler):
    """Bridge stdlib logging into loguru"""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).log(level, record.getMessage())


def install_logging_bridge() -> None:
    """Route uvicorn/fastapi stdlib loggers through loguru once."""
    global _bridge_installed
    if _bridge_installed:
        return

    handler = _LoguruHandler()
    for name in _BRIDGED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.setLevel(logging.DEBUG)
        std_logger.handlers = [handler]
        std_logger.propagate = False

    _bridge_installed = True


def configure_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
            "<cyan>{name}</cyan> - <level>{message}</level>"
        ),
    )
    install_logging_bridge()

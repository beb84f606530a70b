"""Logging setup for the funmatch CLI."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from funmatch.config.models import LoggingSettings

_HANDLER_MARK = "_funmatch_handler"


def configure_logging(settings: LoggingSettings, log_path: Path | None = None) -> logging.Logger:
    """Attach console and rotating file handlers to the ``funmatch`` logger.

    Calling this again replaces the handlers installed by a previous call.

    Args:
        settings: Level and rotation settings.
        log_path: File receiving log output; omitted to log to the console only.

    Returns:
        logging.Logger: The configured package logger.
    """
    logger = logging.getLogger("funmatch")
    for handler in list(logger.handlers):
        if getattr(handler, _HANDLER_MARK, False):
            logger.removeHandler(handler)
            handler.close()

    level = logging.getLevelName(settings.level.upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logger.setLevel(level)

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    console_handler.setLevel(level)
    setattr(console_handler, _HANDLER_MARK, True)
    logger.addHandler(console_handler)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=max(settings.max_size_mb, 1) * 1024 * 1024,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG if level <= logging.DEBUG else logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        setattr(file_handler, _HANDLER_MARK, True)
        logger.addHandler(file_handler)
        logger.setLevel(min(level, file_handler.level))

    return logger


__all__ = ["configure_logging"]

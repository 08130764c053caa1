"""Loguru configuration.

Resets loguru sinks, guarantees a ``request_id`` in every record and routes
stdlib ``logging`` (uvicorn, SQLAlchemy) into loguru so the whole process
writes through one sink.
"""

import inspect
import logging
import sys

from loguru import logger

from core.config import LoggingConfig

PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Redirect standard ``logging`` records to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # uvicorn access lines are replaced by RequestContextMiddleware
        if record.name == "uvicorn.access":
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller that issued the record, outside the logging module
        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging(config: LoggingConfig) -> None:
    """Install the stderr sink and the stdlib interceptor."""
    logger.remove()
    logger.configure(extra={"request_id": "-"})

    if config.json:
        logger.add(sys.stderr, level=config.level, serialize=True)
    else:
        logger.add(
            sys.stderr,
            level=config.level,
            format=PLAIN_FORMAT,
            colorize=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict.keys()):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    logger.info("Logging configured", level=config.level, json=config.json)

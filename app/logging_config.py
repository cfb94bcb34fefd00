"""
logging_config.py — Centralized Logging Configuration

Sets up Loguru as the single logging backend. Intercepts Python's stdlib
logging module so all getLogger() calls in services route through Loguru
with structured output and request context.

Business Rules:
- All logs go through Loguru (no direct print())
- JSON format when LOG_SERIALIZE is on (production)
- Human-readable format in development
- Request ID from middleware is included when available

Called by: app/main.py (create_app)
Depends on: environment (LOG_LEVEL, LOG_SERIALIZE)
"""

import logging
import os
import sys

from loguru import logger


def setup_logging() -> None:
    """Configure Loguru and intercept stdlib logging.

    Call once at app startup.
    """
    # Remove Loguru's default stderr handler so we control format
    logger.remove()

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    serialize = os.getenv("LOG_SERIALIZE", "").lower() in ("1", "true", "yes")

    if serialize:
        # Production: JSON lines to stdout (the container runtime captures these)
        logger.add(
            sys.stdout,
            level=log_level,
            format="{message}",
            serialize=True,
        )
    else:
        logger.add(
            sys.stdout,
            level=log_level,
            format=(
                "<green>{time:HH:mm:ss}</green> | "
                "<level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
                "{extra} {message}"
            ),
            colorize=True,
        )

    # Intercept stdlib logging → route through Loguru
    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)

    # Quiet noisy third-party loggers
    for noisy in ("httpx", "httpcore", "uvicorn.access", "sqlalchemy.engine"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logger.info("Logging configured", level=log_level, serialize=serialize)


class _InterceptHandler(logging.Handler):
    """Route stdlib logging records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find the caller (skip frames from stdlib logging internals)
        frame, depth = logging.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )

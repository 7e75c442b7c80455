"""
Structured logging configuration.

Only orchestration boundaries log.  Calculation, matching and bucketing
functions are pure and stay silent.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import Processor

from training_analytics.core.config import settings


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure structured logging for the application."""

    level = level or settings.LOG_LEVEL
    fmt = fmt or settings.LOG_FORMAT

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=shared_processors,
        )
    )

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper()))

    # SQL echo is only wanted in debug mode
    if not settings.DEBUG:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def log_pipeline_stage(
    logger: structlog.stdlib.BoundLogger,
    pipeline: str,
    stage: str,
    count: int,
    **extra: Any
) -> None:
    """Log the size of one fetch stage.  Never logs exercise data itself."""
    logger.debug(
        "Fetch stage completed",
        pipeline=pipeline,
        stage=stage,
        count=count,
        **extra
    )


def log_short_circuit(
    logger: structlog.stdlib.BoundLogger,
    pipeline: str,
    stage: str,
    **extra: Any
) -> None:
    """Log that a pipeline stopped early because a stage returned nothing."""
    logger.info(
        "No data, skipping remaining stages",
        pipeline=pipeline,
        stage=stage,
        **extra
    )

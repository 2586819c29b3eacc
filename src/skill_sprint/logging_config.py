"""structlog setup shared by the server entry point."""

import logging
import os

import structlog


def is_production() -> bool:
    return os.getenv("ENV", "development").lower() == "production"


def configure_logging(production: bool | None = None) -> None:
    """Configure structlog: JSON lines in production, console output otherwise.

    Args:
        production: Force the mode; None reads the ENV variable.
    """
    if production is None:
        production = is_production()

    renderer = (
        structlog.processors.JSONRenderer()
        if production
        else structlog.dev.ConsoleRenderer()
    )
    level = logging.INFO if production else logging.DEBUG

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

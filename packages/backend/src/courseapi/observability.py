"""Structured logging setup.

structlog for every log call in the app. Request-scoped fields (request_id)
come from contextvars bound in RequestIdMiddleware and are merged into each
entry. JSON output in production, console output in development.
"""

import logging

import structlog

from courseapi.config import settings


def configure_logging(level: str | None = None, json_output: bool | None = None) -> None:
    """Configure structlog and the stdlib root logger. Safe to call twice."""
    level_name = (level or settings.log_level).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    if json_output is None:
        json_output = settings.log_json

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=False,
    )

    # uvicorn and SQLAlchemy log through stdlib logging
    logging.basicConfig(format="%(message)s", level=log_level)

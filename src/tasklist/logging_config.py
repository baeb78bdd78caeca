"""structlog configuration.

Learn: structlog sits on top of stdlib logging so uvicorn's and
SQLAlchemy's loggers end up in the same stream. Request-scoped values
(request_id, user_id) are bound with structlog.contextvars by the
middleware and the auth gate, and merge_contextvars copies them into
every event emitted while that request is being handled.
"""

import logging

import structlog


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Configure stdlib logging and structlog. Safe to call more than once."""
    logging.basicConfig(format="%(message)s", level=level.upper(), force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

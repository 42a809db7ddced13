"""structlog setup for contentsync."""

import logging
import sys
from typing import Any

import structlog
from structlog.contextvars import merge_contextvars

# Clients that log every request at INFO; the indexer already logs each batch.
NOISY_LOGGERS = ("httpx", "httpcore", "psycopg.pool")


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Route structlog through stdlib logging on stdout.

    Context bound with ``bound_contextvars`` (for example the batch number
    during a queue drain) is merged into every event.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    renderer: Any = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_format
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)

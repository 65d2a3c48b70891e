from __future__ import annotations

import logging
import sys
from typing import Any, Callable, MutableMapping, Optional, TextIO

import structlog

from quote_api.config import LOG_LEVEL

# Type alias for structlog processor
Processor = Callable[[Any, str, MutableMapping[str, Any]], Any]


def setup_logging(level: str = LOG_LEVEL, stream: Optional[TextIO] = None) -> None:
    """
    Configures structlog and stdlib logging for the quote service.

    Every event carries an ISO-8601 UTC `timestamp` and its `level`. At DEBUG the
    events are rendered for a terminal; at any other level each event is one JSON
    line, with tracebacks flattened into an `exception` field.

    Args:
        level: Log level name (defaults to LOG_LEVEL from the environment)
        stream: Where structlog events are written (defaults to sys.stdout)
    """
    level = level.upper()
    json_logs = level != "DEBUG"

    logging.basicConfig(
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stdout,
        level=level,
    )

    # request_complete events replace uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if json_logs:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stdout),
        cache_logger_on_first_use=True,
    )

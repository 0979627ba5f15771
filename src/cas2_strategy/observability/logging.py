"""
cas2_strategy.observability.logging

Structured logging configuration for the strategy and its host.

Responsibilities:
- Configure `structlog` for JSON logs.
- Mask CAS service tickets before they reach any sink.
- Provide a small wrapper for obtaining bound loggers.
"""

from __future__ import annotations

import logging
import re
import sys
from typing import Any

import structlog

REDACTED = "***"

# Matches the value of a `ticket=` query parameter inside a logged URL.
_TICKET_IN_QUERY = re.compile(r"(?<=[?&]ticket=)[^&#\s]+")


def configure_logging(*, service_name: str, level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _add_service_name(service_name),
            redact_tickets,
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def _add_service_name(service_name: str):
    def processor(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def redact_ticket_in_url(url: str) -> str:
    return _TICKET_IN_QUERY.sub(REDACTED, url)


def redact_tickets(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Service tickets are single-use credentials; never log them verbatim.

    Masks a `ticket` field outright and any `ticket=` query value inside string fields.
    """

    for key, value in event_dict.items():
        if key == "ticket" and value:
            event_dict[key] = REDACTED
        elif isinstance(value, str) and "ticket=" in value:
            event_dict[key] = redact_ticket_in_url(value)
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


# --- Module Notes -----------------------------------------------------------
# Request-scoped metadata is bound via contextvars in `observability.middleware`.

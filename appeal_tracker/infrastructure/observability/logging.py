"""structlog setup for the appeal engine.

Production and staging render one JSON object per line; every other
environment gets the colored console renderer. Appeal identifiers and
enums are flattened before rendering, so a service may log a UUID case
key or an AppealStatus directly.

Production entry:
    {
        "timestamp": "2026-03-02T09:00:00.000000Z",
        "level": "info",
        "event": "transition_completed",
        "correlation_id": "uuid",
        "service": "AppealLifecycleService",
        "component": "appeals",
        "operation": "transition",
        "case_key": "...",
        "version": 3
    }

The level comes from LOG_LEVEL (default INFO) unless passed explicitly.
"""

import logging
import os
from datetime import date, datetime
from enum import Enum
from typing import Any, cast
from uuid import UUID

import structlog
from structlog.typing import Processor

from appeal_tracker.infrastructure.observability.correlation import (
    correlation_id_processor,
)

LOG_LEVEL_ENV = "LOG_LEVEL"
DEFAULT_LOG_LEVEL = "INFO"
JSON_ENVIRONMENTS = frozenset({"production", "staging"})


def _resolve_level(log_level: str | None) -> int:
    name = (log_level or os.getenv(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL)).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def flatten_domain_values(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Render UUIDs, enums and datetimes as plain strings."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
        elif isinstance(value, UUID):
            event_dict[key] = str(value)
        elif isinstance(value, (datetime, date)):
            event_dict[key] = value.isoformat()
    return event_dict


def configure_structlog(
    environment: str = "production", log_level: str | None = None
) -> None:
    """Configure structlog once, at startup of whatever hosts the engine.

    Args:
        environment: "production" or "staging" for JSON, anything else
            for console output.
        log_level: Level name overriding LOG_LEVEL.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        cast(Processor, correlation_id_processor),
        cast(Processor, flatten_domain_values),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if environment.strip().lower() in JSON_ENVIRONMENTS:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(_resolve_level(log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger_for_service(
    service_name: str, component: str = "appeals"
) -> structlog.BoundLogger:
    """Logger for code outside the service classes (bootstrap, scripts)."""
    return structlog.get_logger().bind(service=service_name, component=component)

"""Observability infrastructure: structured logging and correlation.

Usage:
    from appeal_tracker.infrastructure.observability import (
        configure_structlog,
        request_context,
    )

    configure_structlog(environment="production")
    with request_context(incoming_correlation_id):
        ...
"""

from appeal_tracker.infrastructure.observability.correlation import (
    correlation_id_processor,
    generate_correlation_id,
    get_correlation_id,
    request_context,
    set_correlation_id,
)
from appeal_tracker.infrastructure.observability.logging import (
    configure_structlog,
    flatten_domain_values,
    get_logger_for_service,
)

__all__: list[str] = [
    "configure_structlog",
    "correlation_id_processor",
    "flatten_domain_values",
    "generate_correlation_id",
    "get_correlation_id",
    "get_logger_for_service",
    "request_context",
    "set_correlation_id",
]

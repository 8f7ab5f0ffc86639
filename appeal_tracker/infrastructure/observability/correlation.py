"""Request correlation for appeal operations.

Each external call into the engine is one unit of work. A correlation id
set at the start of that unit (by whatever transport hosts the engine)
is attached to every log line the services emit, across await points.

Usage:
    with request_context(correlation_id=incoming_header):
        await lifecycle.transition(principal, case_key, "under review")
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

# Empty string means "no request context"
_correlation_id: ContextVar[str] = ContextVar("appeal_correlation_id", default="")


def generate_correlation_id() -> str:
    """Generate a new correlation ID (UUID4 string)."""
    return str(uuid4())


def get_correlation_id() -> str:
    """Get the current correlation ID, or an empty string if none is set."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id.set(correlation_id)


@contextmanager
def request_context(correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id to one unit of work.

    The previous value is restored on exit, so nested or sequential
    requests in the same task never leak ids into each other.

    Args:
        correlation_id: Incoming id; a new one is generated if None.

    Yields:
        The correlation id in effect inside the block.
    """
    effective = correlation_id or generate_correlation_id()
    token = _correlation_id.set(effective)
    try:
        yield effective
    finally:
        _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor adding the current correlation_id.

    An id already bound on the logger is left untouched.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict

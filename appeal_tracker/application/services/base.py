"""Logging mixin shared by the appeal services.

Usage:
    class AppealNoteService(LoggingMixin):
        def __init__(self, repository: AppealRepositoryProtocol) -> None:
            self._repository = repository
            self._init_logger()

        async def add_note(self, principal: Principal, case_key: UUID) -> None:
            log = self._log_operation("add_note", case_key=str(case_key))
            log.info("note_added")
"""

import structlog

from appeal_tracker.infrastructure.observability.correlation import (
    get_correlation_id,
)


class LoggingMixin:
    """Gives a service a structlog logger bound to its class name.

    Every line carries `service` and `component`; operation loggers add
    `operation`, the request correlation id when one is set, and any
    identifiers the caller passes (case key, principal id).
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "appeals") -> None:
        """Bind the service logger. Call at the end of __init__."""
        self._log = structlog.get_logger().bind(
            service=type(self).__name__,
            component=component,
        )

    def _log_operation(self, operation: str, **context: object) -> structlog.BoundLogger:
        """Logger scoped to one call of one operation."""
        correlation_id = get_correlation_id()
        if correlation_id:
            context.setdefault("correlation_id", correlation_id)
        return self._log.bind(operation=operation, **context)

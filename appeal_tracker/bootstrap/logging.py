"""Startup logging for hosts embedding the appeal engine."""

from __future__ import annotations

import os

from appeal_tracker.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)
from appeal_tracker.infrastructure.observability import get_logger_for_service

ENVIRONMENT_ENV = "APPEAL_ENVIRONMENT"


def configure_structlog(environment: str | None = None) -> None:
    """Configure logging for the host environment.

    Falls back to APPEAL_ENVIRONMENT, then to "development".
    """
    resolved = environment or os.getenv(ENVIRONMENT_ENV, "development")
    _configure_structlog(environment=resolved)
    get_logger_for_service("bootstrap").info("logging_configured", environment=resolved)


__all__ = ["configure_structlog"]

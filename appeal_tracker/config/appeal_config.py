"""Appeal engine configuration.

This module defines the engine's tunables with environment variable
overrides for deployment.

Reviewer access policy:
    Some review surfaces let a reviewer act on a case that has no
    reviewer assigned yet; others require a strict assignment match.
    allow_unassigned_reviewer_access selects between the two:
    - False (default): reviewer must be the assigned reviewer.
    - True: reviewer may also act on unassigned cases.

Environment Variables:
- APPEAL_ALLOW_UNASSIGNED_REVIEWER_ACCESS: "true"/"false" (default: false)
- APPEAL_CASE_ID_PREFIX: Case id prefix (default: APL)
- APPEAL_CASE_ID_MAX_ATTEMPTS: Random candidates before fallback (default: 5)
- APPEAL_CASE_ID_PERSIST_ATTEMPTS: Allocation rounds on persist collision (default: 3)
- APPEAL_DEADLINE_HORIZON_DAYS: Days counted as "this week" (default: 7)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Unrecognised values fall back to the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


def _get_str_env(key: str, default: str) -> str:
    value = os.environ.get(key)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass(frozen=True)
class AppealEngineConfig:
    """Configuration for the appeal lifecycle engine.

    Attributes:
        allow_unassigned_reviewer_access: Whether reviewers may act on
            cases with no reviewer assigned.
        case_id_prefix: Prefix of human-readable case ids.
        case_id_max_attempts: Random candidates probed before the
            timestamp fallback.
        case_id_persist_attempts: Allocation rounds when the store rejects
            a case id at persist time.
        deadline_horizon_days: Days ahead counted as "this week".
    """

    allow_unassigned_reviewer_access: bool = False
    case_id_prefix: str = "APL"
    case_id_max_attempts: int = 5
    case_id_persist_attempts: int = 3
    deadline_horizon_days: int = 7

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.case_id_prefix or not self.case_id_prefix.isalnum():
            raise ValueError(
                f"case_id_prefix must be alphanumeric, got {self.case_id_prefix!r}"
            )
        if self.case_id_max_attempts < 1:
            raise ValueError(
                f"case_id_max_attempts must be at least 1, got {self.case_id_max_attempts}"
            )
        if self.case_id_persist_attempts < 1:
            raise ValueError(
                "case_id_persist_attempts must be at least 1, "
                f"got {self.case_id_persist_attempts}"
            )
        if self.deadline_horizon_days < 0:
            raise ValueError(
                "deadline_horizon_days must be non-negative, "
                f"got {self.deadline_horizon_days}"
            )

    @classmethod
    def from_environment(cls) -> AppealEngineConfig:
        """Create config from environment variables with defaults.

        Returns:
            AppealEngineConfig with values from environment or defaults.
        """
        return cls(
            allow_unassigned_reviewer_access=_get_bool_env(
                "APPEAL_ALLOW_UNASSIGNED_REVIEWER_ACCESS", False
            ),
            case_id_prefix=_get_str_env("APPEAL_CASE_ID_PREFIX", "APL"),
            case_id_max_attempts=_get_int_env("APPEAL_CASE_ID_MAX_ATTEMPTS", 5),
            case_id_persist_attempts=_get_int_env(
                "APPEAL_CASE_ID_PERSIST_ATTEMPTS", 3
            ),
            deadline_horizon_days=_get_int_env("APPEAL_DEADLINE_HORIZON_DAYS", 7),
        )


# Pre-defined configurations for common use cases

# Strict assignment match for reviewers
DEFAULT_APPEAL_ENGINE_CONFIG = AppealEngineConfig()

# Reviewers may also pick up unassigned cases
PERMISSIVE_REVIEWER_CONFIG = AppealEngineConfig(allow_unassigned_reviewer_access=True)

"""Configuration module for the appeal tracker.

Available Configurations:
- AppealEngineConfig: Reviewer access policy, case id allocation, deadline horizon
"""

from appeal_tracker.config.appeal_config import (
    DEFAULT_APPEAL_ENGINE_CONFIG,
    PERMISSIVE_REVIEWER_CONFIG,
    AppealEngineConfig,
)

__all__ = [
    "AppealEngineConfig",
    "DEFAULT_APPEAL_ENGINE_CONFIG",
    "PERMISSIVE_REVIEWER_CONFIG",
]

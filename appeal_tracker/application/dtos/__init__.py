"""Application DTOs (Data Transfer Objects).

Pydantic models validating caller input at the application boundary.
They are distinct from domain models (immutable business objects) and
convert into them once validated.
"""

from appeal_tracker.application.dtos.appeal import (
    AppealSubmissionRequest,
    AssignmentUpdate,
    parse_dto,
)

__all__: list[str] = [
    "AppealSubmissionRequest",
    "AssignmentUpdate",
    "parse_dto",
]

"""Authenticated principal model.

Principals arrive already resolved by the authentication collaborator.
The engine only reads their identity, role and active flag; it never
issues or validates credentials.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Role(Enum):
    """Closed set of roles a principal may hold.

    Roles:
        STUDENT: Files appeals and adds public notes to their own cases.
        ADMIN: Triages, assigns, overrides status, manages deadlines.
        REVIEWER: Evaluates assigned appeals and records decisions.
    """

    STUDENT = "student"
    ADMIN = "admin"
    REVIEWER = "reviewer"


@dataclass(frozen=True, eq=True)
class Principal:
    """An authenticated actor with an identity and a role.

    Attributes:
        id: Opaque principal identifier.
        role: The principal's role.
        is_active: False for deactivated accounts; such principals are
            rejected before any operation is evaluated.
        display_name: Optional human-readable name for audit descriptions.
        student_number: Registered student number (students only).
    """

    id: str
    role: Role
    is_active: bool = field(default=True)
    display_name: str | None = field(default=None)
    student_number: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate principal fields."""
        if not self.id or not self.id.strip():
            raise ValueError("Principal id must not be empty")

    @property
    def name(self) -> str:
        """Name used in timeline descriptions."""
        return self.display_name or self.id

    @property
    def own_student_identifier(self) -> str:
        """Identifier a submission's student id must match."""
        return self.student_number or self.id

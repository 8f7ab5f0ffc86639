"""Appeal input DTOs.

Pydantic models that turn loosely shaped caller input into domain values.
Defaulting rules live here, stated once, instead of being re-checked by
each operation:

- Strings are stripped; empty optional strings become None.
- has_adviser = false drops every adviser field.
- grounds accepts a list, a JSON-encoded list, or a single string.
- Confirmation flags accept booleans or "true"/"false" strings.

AssignmentUpdate distinguishes an omitted field (leave unchanged) from an
explicit null or empty string (clear the assignment) via model_fields_set.

Developer Golden Rules:
1. VALIDATE EARLY - Pydantic handles schema validation
2. FAIL LOUD - Validation problems surface as AppealValidationError
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from appeal_tracker.domain.errors.validation import AppealValidationError
from appeal_tracker.domain.models.appeal import (
    AdviserContact,
    AppealDetails,
    AppealType,
    Ground,
    Priority,
    Semester,
)

# Deliberately loose: one "@", a dot in the domain, no whitespace
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

_ModelT = TypeVar("_ModelT", bound=BaseModel)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _check_email(value: str | None, field_name: str) -> str | None:
    if value is None:
        return None
    if not _EMAIL_PATTERN.match(value):
        raise ValueError(f"{field_name} must be a valid email address")
    return value.lower()


class AppealSubmissionRequest(BaseModel):
    """Body of a new appeal as supplied by the student.

    Attributes mirror the submission form. student_id is the student
    number the submitter claims; the service checks it against the
    authenticated principal.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    declaration: bool = Field(default=False)
    deadline_check: bool = Field(default=False)
    confirm_all: bool = Field(default=False)

    first_name: str = Field(..., min_length=1, max_length=200)
    last_name: str = Field(..., min_length=1, max_length=200)
    student_id: str = Field(..., min_length=1, max_length=64)
    email: str = Field(..., min_length=3, max_length=320)
    phone: str | None = Field(default=None, max_length=64)
    course: str = Field(..., min_length=1, max_length=200)
    department: str = Field(..., min_length=1, max_length=200)

    has_adviser: bool = Field(default=False)
    adviser_name: str | None = Field(default=None, max_length=200)
    adviser_email: str | None = Field(default=None, max_length=320)
    adviser_phone: str | None = Field(default=None, max_length=64)

    appeal_type: AppealType
    grounds: list[Ground] = Field(default_factory=list)
    statement: str = Field(..., min_length=1, max_length=20_000)

    module_code: str | None = Field(default=None, max_length=32)
    academic_year: str = Field(..., min_length=1, max_length=32)
    semester: Semester | None = Field(default=None)

    @field_validator(
        "phone",
        "adviser_name",
        "adviser_email",
        "adviser_phone",
        "module_code",
        "semester",
        mode="before",
    )
    @classmethod
    def empty_optional_to_none(cls, value: Any) -> Any:
        """Treat empty optional strings as absent."""
        return _blank_to_none(value)

    @field_validator("has_adviser", mode="before")
    @classmethod
    def missing_adviser_flag_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("grounds", mode="before")
    @classmethod
    def coerce_grounds(cls, value: Any) -> Any:
        """Accept a list, a JSON-encoded list or a single ground."""
        if value is None:
            return []
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return []
            try:
                decoded = json.loads(stripped)
            except ValueError:
                return [stripped]
            return decoded if isinstance(decoded, list) else [decoded]
        return value

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return _check_email(value, "email")  # type: ignore[return-value]

    @field_validator("adviser_email")
    @classmethod
    def validate_adviser_email(cls, value: str | None) -> str | None:
        return _check_email(value, "adviser_email")

    @model_validator(mode="after")
    def apply_adviser_rules(self) -> AppealSubmissionRequest:
        """Drop adviser fields without an adviser; require a name with one."""
        if not self.has_adviser:
            self.adviser_name = None
            self.adviser_email = None
            self.adviser_phone = None
        elif not self.adviser_name:
            raise ValueError("adviser_name is required when has_adviser is true")
        return self

    @property
    def confirmations_accepted(self) -> bool:
        """True when declaration, deadline check and final confirmation are all set."""
        return self.declaration and self.deadline_check and self.confirm_all

    def to_details(self) -> AppealDetails:
        """Convert to the domain value object."""
        adviser = None
        if self.has_adviser and self.adviser_name:
            adviser = AdviserContact(
                name=self.adviser_name,
                email=self.adviser_email,
                phone=self.adviser_phone,
            )
        return AppealDetails(
            first_name=self.first_name,
            last_name=self.last_name,
            student_number=self.student_id,
            email=self.email,
            course=self.course,
            department=self.department,
            appeal_type=self.appeal_type,
            statement=self.statement,
            academic_year=self.academic_year,
            grounds=tuple(dict.fromkeys(self.grounds)),
            phone=self.phone,
            adviser=adviser,
            module_code=self.module_code,
            semester=self.semester,
        )


class AssignmentUpdate(BaseModel):
    """Admin update of reviewer, owning admin and priority.

    Omitted fields are left unchanged; an explicit null or empty string
    for reviewer/admin clears that assignment. Priority can be changed
    but never cleared.
    """

    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    reviewer: str | None = Field(default=None, max_length=128)
    admin: str | None = Field(default=None, max_length=128)
    priority: Priority | None = Field(default=None)

    @field_validator("reviewer", "admin", mode="before")
    @classmethod
    def empty_clears(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @model_validator(mode="after")
    def validate_fields(self) -> AssignmentUpdate:
        if "priority" in self.model_fields_set and self.priority is None:
            raise ValueError("priority cannot be cleared")
        if not self.model_fields_set:
            raise ValueError("at least one of reviewer, admin, priority is required")
        return self

    def changes(self) -> dict[str, Any]:
        """Fields explicitly supplied, mapped to their (possibly None) values."""
        return {name: getattr(self, name) for name in sorted(self.model_fields_set)}


def parse_dto(
    model: type[_ModelT],
    payload: _ModelT | Mapping[str, Any],
    field_name: str,
) -> _ModelT:
    """Validate a payload into a DTO, translating pydantic errors.

    Args:
        model: The DTO class.
        payload: An instance of the DTO or a mapping to validate.
        field_name: Name reported in the validation error.

    Returns:
        The validated DTO.

    Raises:
        AppealValidationError: If the payload does not validate.
    """
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(part) for part in err['loc']) or field_name}: {err['msg']}"
            for err in exc.errors()
        ]
        raise AppealValidationError(field_name, "; ".join(problems), problems) from exc

"""Appeal repository stub implementation.

This module provides an in-memory implementation of
AppealRepositoryProtocol for development and testing purposes.

Atomicity:
- A single asyncio.Lock serialises every write and the case id claim,
  the in-memory equivalent of a row-level lock plus a unique index.
- compare_and_swap() only succeeds for the version the caller read.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from uuid import UUID

from appeal_tracker.application.ports.appeal_repository import (
    AppealRepositoryProtocol,
)
from appeal_tracker.domain.errors.appeal import AppealNotFoundError
from appeal_tracker.domain.errors.case_id import DuplicateCaseIdError
from appeal_tracker.domain.errors.concurrent_modification import (
    ConcurrentModificationError,
)
from appeal_tracker.domain.models.appeal import Appeal


class AppealRepositoryStub(AppealRepositoryProtocol):
    """In-memory stub implementation of AppealRepositoryProtocol.

    It is NOT suitable for production use.

    Attributes:
        _appeals: Mapping of case_key to the latest stored Appeal.
        _case_ids: Mapping of claimed case_id to case_key.
        _write_count: Number of successful writes (for test assertions).
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._appeals: dict[UUID, Appeal] = {}
        self._case_ids: dict[str, UUID] = {}
        self._lock = asyncio.Lock()
        self._write_count = 0

    async def save_new(self, appeal: Appeal) -> Appeal:
        """Store a newly created appeal, claiming its case id.

        Args:
            appeal: The appeal to store.

        Returns:
            The stored appeal with version 1.

        Raises:
            DuplicateCaseIdError: If the case id is already claimed.
            ValueError: If the case key already exists.
        """
        async with self._lock:
            if appeal.case_key in self._appeals:
                raise ValueError(f"Appeal already exists: {appeal.case_key}")
            if appeal.case_id in self._case_ids:
                raise DuplicateCaseIdError(appeal.case_id)
            stored = replace(appeal, version=1)
            self._appeals[appeal.case_key] = stored
            self._case_ids[appeal.case_id] = appeal.case_key
            self._write_count += 1
            return stored

    async def get(self, case_key: UUID) -> Appeal | None:
        """Retrieve an appeal by case key."""
        return self._appeals.get(case_key)

    async def compare_and_swap(
        self,
        case_key: UUID,
        expected_version: int,
        new_value: Appeal,
    ) -> Appeal:
        """Atomically replace an appeal if its version is unchanged.

        Raises:
            AppealNotFoundError: If the appeal doesn't exist.
            ConcurrentModificationError: If the stored version differs.
            ValueError: If new_value tries to change identity fields.
        """
        async with self._lock:
            current = self._appeals.get(case_key)
            if current is None:
                raise AppealNotFoundError(case_key)
            if current.version != expected_version:
                raise ConcurrentModificationError(
                    case_key=case_key,
                    expected_version=expected_version,
                    actual_version=current.version,
                )
            if new_value.case_key != case_key or new_value.case_id != current.case_id:
                raise ValueError(f"case_key and case_id of {case_key} are immutable")
            if len(new_value.timeline) < len(current.timeline):
                raise ValueError(f"timeline of {case_key} is append-only")

            stored = replace(new_value, version=current.version + 1)
            self._appeals[case_key] = stored
            self._write_count += 1
            return stored

    async def exists_case_id(self, case_id: str) -> bool:
        """Check whether a case id is already in use."""
        return case_id in self._case_ids

    async def list_outstanding(self) -> list[Appeal]:
        """List appeals that are not in a terminal status."""
        outstanding = [a for a in self._appeals.values() if not a.is_closed]
        outstanding.sort(key=lambda a: (a.submitted_at, a.case_id))
        return outstanding

    @property
    def write_count(self) -> int:
        """Number of successful writes since creation or clear()."""
        return self._write_count

    def count(self) -> int:
        """Number of stored appeals."""
        return len(self._appeals)

    def clear(self) -> None:
        """Clear all appeals (for testing)."""
        self._appeals.clear()
        self._case_ids.clear()
        self._write_count = 0

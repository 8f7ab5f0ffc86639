"""Appeal repository port.

This module defines the abstract interface for appeal storage. The
engine's correctness depends on the atomicity contract described here,
so every implementation must honour it.

Contract:
- get() returns a consistent snapshot of one appeal.
- compare_and_swap() stores the new value only if the stored version
  still equals expected_version, and bumps the version by one. It is
  atomic per case: two concurrent writers of the same version cannot
  both succeed.
- save_new() claims the case_id at persist time; an already-claimed
  case_id is rejected and nothing is stored.
- exists_case_id() is a side-effect free probe used by the allocator.

Developer Golden Rules:
1. FAIL LOUD - Repository raises on conflicts, never merges silently
2. NO DELETES - There is no deletion path for an appeal
3. CAS FOR EVERY MUTATION - Services only write through compare_and_swap()
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from appeal_tracker.domain.models.appeal import Appeal


class AppealRepositoryProtocol(Protocol):
    """Protocol for appeal persistence with optimistic locking.

    Methods:
        save_new: Store a newly created appeal
        get: Retrieve an appeal by case key
        compare_and_swap: Replace an appeal if its version is unchanged
        exists_case_id: Check whether a human-readable case id is taken
        list_outstanding: List appeals that are not in a terminal status
    """

    async def save_new(self, appeal: Appeal) -> Appeal:
        """Store a newly created appeal.

        Args:
            appeal: The appeal to store (version 0).

        Returns:
            The stored appeal (version 1).

        Raises:
            DuplicateCaseIdError: If appeal.case_id is already claimed.
            ValueError: If appeal.case_key already exists.
        """
        ...

    async def get(self, case_key: UUID) -> Appeal | None:
        """Retrieve an appeal by case key.

        Args:
            case_key: The internal appeal identifier.

        Returns:
            The appeal if found, None otherwise.
        """
        ...

    async def compare_and_swap(
        self,
        case_key: UUID,
        expected_version: int,
        new_value: Appeal,
    ) -> Appeal:
        """Atomically replace an appeal if its version is unchanged.

        Args:
            case_key: The appeal to update.
            expected_version: Version the caller read before mutating.
            new_value: The mutated appeal.

        Returns:
            The stored appeal with version expected_version + 1.

        Raises:
            AppealNotFoundError: If the appeal doesn't exist.
            ConcurrentModificationError: If the stored version differs.
        """
        ...

    async def exists_case_id(self, case_id: str) -> bool:
        """Check whether a case id is already in use.

        Args:
            case_id: Human-readable identifier to probe.

        Returns:
            True if an appeal with this case id exists.
        """
        ...

    async def list_outstanding(self) -> list[Appeal]:
        """List appeals whose status is not terminal.

        Returns:
            Outstanding appeals ordered by submission time.
        """
        ...

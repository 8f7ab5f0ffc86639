"""Test helpers for appeal tracker tests.

This package contains reusable test utilities and fake implementations
for dependency injection in unit tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    SequenceCodeSource: Scripted case id codes for forcing collisions
    make_principal / submission_payload: Test data builders

Usage:
    from tests.helpers import FakeTimeAuthority
"""

from tests.helpers.appeal_builders import (
    SequenceCodeSource,
    make_appeal,
    make_principal,
    submission_payload,
)
from tests.helpers.fake_time_authority import FakeTimeAuthority

__all__ = [
    "FakeTimeAuthority",
    "SequenceCodeSource",
    "make_appeal",
    "make_principal",
    "submission_payload",
]

"""
Domain layer - Pure business logic for the appeal tracker.

This layer contains:
- The appeal aggregate and its value objects
- Read models (role-filtered views, deadline buckets, bulk results)
- Pure domain services (access policy, deadline bucketing)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure,
config or bootstrap. Only stdlib and typing imports are allowed.
"""

from appeal_tracker.domain.exceptions import AppealTrackerError, ErrorKind

__all__: list[str] = ["AppealTrackerError", "ErrorKind"]

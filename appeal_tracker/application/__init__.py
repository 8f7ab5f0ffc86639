"""
Application layer - Use cases and orchestration for the appeal tracker.

This layer contains:
- Application services (lifecycle, notes, assignment, deadlines)
- Port definitions (abstract interfaces for infrastructure)
- DTOs validating loosely shaped input into domain values

IMPORT RULES:
- May import from domain
- Must NOT import from infrastructure, config wiring or bootstrap
"""

"""
Appeal Tracker - Student Appeal Lifecycle Engine

Tracks student appeal cases from submission through triage, review and
decision, with role-gated transitions and an append-only audit timeline
that students see in redacted form.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]

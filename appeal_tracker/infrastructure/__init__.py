"""
Infrastructure layer - adapters, stubs and observability.

This layer implements the application ports and provides the
structured logging setup.
"""

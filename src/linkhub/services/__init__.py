# src/linkhub/services/__init__.py
"""Application services."""

from .session import SessionManager, SessionToken

__all__ = ["SessionManager", "SessionToken"]

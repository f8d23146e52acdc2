# src/linkhub/api/__init__.py
"""HTTP API for linkhub."""

from .endpoints import auth_router, posts_router

__all__ = ["auth_router", "posts_router"]

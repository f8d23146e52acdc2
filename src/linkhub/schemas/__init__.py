# src/linkhub/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .post import CommentCreate, CommentResponse, PostCreate, PostResponse, VoteResponse
from .user import Credentials, SessionResponse

__all__ = [
    "CommentCreate", "CommentResponse",
    "Credentials",
    "PostCreate", "PostResponse",
    "SessionResponse",
    "VoteResponse",
]

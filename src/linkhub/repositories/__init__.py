# src/linkhub/repositories/__init__.py
"""Storage backends for posts and users."""

from .post_memory import PostMemoryRepository
from .post_mongo import PostMongoRepository
from .post_repo import PostRepository
from .user_repo import UserMemoryRepository, UserRepository, UserSQLRepository

__all__ = [
    "PostMemoryRepository",
    "PostMongoRepository",
    "PostRepository",
    "UserMemoryRepository",
    "UserRepository",
    "UserSQLRepository",
]

# src/linkhub/models/__init__.py
"""Domain models and SQLAlchemy records for the linkhub application."""

from .comment import Comment, CommentList
from .post import Post, PostCategory, PostType
from .session import SessionRecord
from .user import User, UserAccount
from .vote import Vote, VoteList, VoteValue

__all__ = [
    "Comment", "CommentList",
    "Post", "PostCategory", "PostType",
    "SessionRecord",
    "User", "UserAccount",
    "Vote", "VoteList", "VoteValue",
]

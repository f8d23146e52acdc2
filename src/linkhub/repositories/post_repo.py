"""Storage contract for post aggregates."""
from __future__ import annotations

from abc import ABC, abstractmethod

from linkhub.core.errors import StatusMessage
from linkhub.models.comment import Comment
from linkhub.models.post import Post

__all__ = ["PostRepository", "by_newest", "by_ranking"]


def by_ranking(posts: list[Post]) -> list[Post]:
    """Return posts ordered by descending score, oldest first on ties."""
    return sorted(posts, key=Post.ranking_key)


def by_newest(posts: list[Post]) -> list[Post]:
    """Return posts ordered by creation time, newest first, ignoring score."""
    return sorted(posts, key=lambda post: post.created, reverse=True)


class PostRepository(ABC):
    """Storage for post aggregates.

    Every mutating call is a read-modify-write on a single post and returns
    the post as stored after the change. Implementations raise
    ``NotFoundError`` for unknown post ids, ``UnauthorizedError`` when the
    requester may not perform the change and ``StorageError`` when the
    backing store fails.
    """

    @abstractmethod
    def get_all(self) -> list[Post]:
        """Return every post, highest score first."""

    @abstractmethod
    def add_post(self, post: Post) -> None:
        """Store a new post."""

    @abstractmethod
    def get_by_category(self, category: str) -> list[Post]:
        """Return the posts of one category, highest score first."""

    @abstractmethod
    def get_by_id(self, post_id: str) -> Post:
        """Return one post, counting the read as a view."""

    @abstractmethod
    def delete_post(self, post_id: str, requester_id: str) -> StatusMessage:
        """Delete a post written by ``requester_id`` and return ``SUCCESS``."""

    @abstractmethod
    def add_comment(self, post_id: str, comment: Comment) -> Post:
        """Append ``comment`` to a post."""

    @abstractmethod
    def delete_comment(self, post_id: str, comment_id: str, requester_id: str) -> Post:
        """Remove a comment written by ``requester_id``."""

    @abstractmethod
    def upvote_post(self, post_id: str, requester_id: str) -> Post:
        """Record a like from ``requester_id``."""

    @abstractmethod
    def downvote_post(self, post_id: str, requester_id: str) -> Post:
        """Record a dislike from ``requester_id``."""

    @abstractmethod
    def unvote_post(self, post_id: str, requester_id: str) -> Post:
        """Withdraw the vote of ``requester_id``."""

    @abstractmethod
    def get_by_user(self, username: str) -> list[Post]:
        """Return the posts written by ``username``, newest first."""

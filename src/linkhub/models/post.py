# src/linkhub/models/post.py
"""The post aggregate: author, vote ledger, comments and derived ranking."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from linkhub.models.comment import Comment, CommentList
from linkhub.models.user import User
from linkhub.models.vote import VoteList
from linkhub.utils.ids import new_id


class PostType(str, Enum):
    TEXT = "text"
    LINK = "link"


class PostCategory(str, Enum):
    MUSIC = "music"
    FUNNY = "funny"
    VIDEOS = "videos"
    PROGRAMMING = "programming"
    NEWS = "news"
    FASHION = "fashion"


@dataclass
class Post:
    """Aggregate root owning its votes and comments.

    ``score`` and ``likes_percent`` are cached values; every vote mutation
    must be followed by ``update_score`` before the post is stored. When
    either is left out at construction both are derived from the ledger.
    """

    author: User
    type: PostType
    category: PostCategory
    title: str
    url: str = ""
    text: str = ""
    id: str = field(default_factory=new_id)
    created: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(datetime.UTC)
    )
    views: int = 0
    votes: VoteList = field(default_factory=VoteList)
    comments: CommentList = field(default_factory=CommentList)
    score: int | None = None
    likes_percent: int | None = None

    def __post_init__(self) -> None:
        if self.score is None or self.likes_percent is None:
            self.update_score()

    @classmethod
    def new(
        cls,
        author: User,
        *,
        type: PostType,
        category: PostCategory,
        title: str,
        url: str = "",
        text: str = "",
    ) -> Post:
        """Create a post carrying the author's implicit upvote."""
        return cls(
            author=author,
            type=type,
            category=category,
            title=title,
            url=url,
            text=text,
            votes=VoteList.for_author(author.id),
        )

    def update_score(self) -> None:
        """Recompute ``score`` and ``likes_percent`` from the ledger."""
        total = len(self.votes)
        self.score = 2 * self.votes.likes_count - total
        self.likes_percent = self.votes.likes_count * 100 // total if total else 0

    def upvote(self, user_id: str) -> None:
        self.votes.upvote(user_id)
        self.update_score()

    def downvote(self, user_id: str) -> None:
        self.votes.downvote(user_id)
        self.update_score()

    def unvote(self, user_id: str) -> None:
        self.votes.unvote(user_id)
        self.update_score()

    def add_comment(self, comment: Comment) -> None:
        self.comments.add(comment)

    def delete_comment(self, comment_id: str, requester_id: str) -> None:
        self.comments.delete(comment_id, requester_id)

    def ranking_key(self) -> tuple[int, datetime.datetime]:
        """Sort key putting the highest score first, oldest first on ties."""
        return (-self.score, self.created)

    def vote_fields(self) -> dict[str, Any]:
        """Stored fields touched by a vote mutation."""
        return {
            "votes": self.votes.to_document(),
            "score": self.score,
            "likes_percent": self.likes_percent,
        }

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "category": self.category.value,
            "title": self.title,
            "url": self.url,
            "text": self.text,
            "author": self.author.model_dump(),
            "created": self.created,
            "views": self.views,
            "comments": self.comments.to_document(),
            **self.vote_fields(),
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> Post:
        return cls(
            author=User.model_validate(data["author"]),
            type=PostType(data["type"]),
            category=PostCategory(data["category"]),
            title=data.get("title", ""),
            url=data.get("url") or "",
            text=data.get("text") or "",
            id=data["id"],
            created=data["created"],
            views=data.get("views", 0),
            votes=VoteList.from_document(data.get("votes")),
            comments=CommentList.from_document(data.get("comments")),
            score=data.get("score"),
            likes_percent=data.get("likes_percent"),
        )

# src/linkhub/models/comment.py
"""Comments embedded in a post."""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from linkhub.core.errors import ListNotInitializedError, NotFoundError, UnauthorizedError
from linkhub.models.user import User
from linkhub.utils.ids import new_id


def _now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


@dataclass
class Comment:
    """A comment left by ``author`` on a post."""

    author: User
    body: str
    id: str = field(default_factory=new_id)
    created: datetime.datetime = field(default_factory=_now)

    def to_document(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "author": self.author.model_dump(),
            "body": self.body,
            "created": self.created,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> Comment:
        return cls(
            author=User.model_validate(data["author"]),
            body=data["body"],
            id=data["id"],
            created=data["created"],
        )


class CommentList:
    """Comments of one post, unique by id.

    Removal swaps the removed comment with the last one, so order is only
    guaranteed until the first deletion.
    """

    def __init__(self, comments: Iterable[Comment] | None = ()) -> None:
        entries: list[Comment] = []
        self._positions: dict[str, int] = {}
        for comment in comments or ():
            if comment.id not in self._positions:
                self._positions[comment.id] = len(entries)
                entries.append(comment)
        self._comments: list[Comment] | None = None if comments is None else entries

    def __len__(self) -> int:
        return len(self._comments or ())

    def __iter__(self) -> Iterator[Comment]:
        return iter(self._comments or ())

    def add(self, comment: Comment) -> None:
        if self._comments is None:
            raise ListNotInitializedError("nil comment list")
        self._positions.setdefault(comment.id, len(self._comments))
        self._comments.append(comment)

    def delete(self, comment_id: str, requester_id: str) -> None:
        """Remove a comment on behalf of ``requester_id``.

        Raises:
            NotFoundError: No comment has this id.
            UnauthorizedError: The requester did not write the comment.
        """
        if self._comments is None:
            raise ListNotInitializedError("nil comment list")
        idx = self._positions.get(comment_id)
        if idx is None:
            raise NotFoundError("comment not found")
        if self._comments[idx].author.id != requester_id:
            raise UnauthorizedError()

        del self._positions[comment_id]
        last = self._comments.pop()
        if idx < len(self._comments):
            self._comments[idx] = last
            self._positions[last.id] = idx

    def to_document(self) -> list[dict[str, Any]] | None:
        if self._comments is None:
            return None
        return [comment.to_document() for comment in self._comments]

    @classmethod
    def from_document(cls, data: list[dict[str, Any]] | None) -> CommentList:
        if data is None:
            return cls(None)
        return cls(Comment.from_document(item) for item in data)

# src/linkhub/models/vote.py
"""Per-post vote ledger."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from linkhub.core.errors import ListNotInitializedError


class VoteValue(IntEnum):
    """Direction of a single vote."""

    LIKE = 1
    DISLIKE = -1


@dataclass
class Vote:
    """One user's vote on a post."""

    user_id: str
    value: VoteValue

    def to_document(self) -> dict[str, Any]:
        return {"user": self.user_id, "vote": int(self.value)}

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> Vote:
        return cls(user_id=data["user"], value=VoteValue(data["vote"]))


class VoteList:
    """Ledger holding at most one vote per user plus a cached like counter.

    ``likes_count`` always equals the number of LIKE entries. Removal swaps
    the removed entry with the last one, so entry order is not stable.

    A ledger built from ``None`` is uninitialized (for example a stored post
    whose votes were never written); every mutation on it raises
    ``ListNotInitializedError``.
    """

    def __init__(self, votes: Iterable[Vote] | None = ()) -> None:
        entries: list[Vote] = []
        self._positions: dict[str, int] = {}
        self.likes_count = 0
        # Later entries for an already seen user are dropped.
        for vote in votes or ():
            if vote.user_id in self._positions:
                continue
            self._positions[vote.user_id] = len(entries)
            entries.append(vote)
            if vote.value is VoteValue.LIKE:
                self.likes_count += 1
        self._votes: list[Vote] | None = None if votes is None else entries

    @classmethod
    def for_author(cls, author_id: str) -> VoteList:
        """Return a fresh ledger holding the author's implicit upvote."""
        return cls([Vote(user_id=author_id, value=VoteValue.LIKE)])

    @property
    def initialized(self) -> bool:
        return self._votes is not None

    def __len__(self) -> int:
        return len(self._votes or ())

    def __iter__(self) -> Iterator[Vote]:
        return iter(self._votes or ())

    def get(self, user_id: str) -> Vote | None:
        """Return the vote cast by ``user_id``, if any."""
        idx = self._positions.get(user_id)
        if idx is None or self._votes is None:
            return None
        return self._votes[idx]

    def _require_votes(self) -> list[Vote]:
        if self._votes is None:
            raise ListNotInitializedError("nil vote list")
        return self._votes

    def _set(self, user_id: str, value: VoteValue) -> VoteValue | None:
        """Upsert the vote of ``user_id`` and return its previous value."""
        votes = self._require_votes()
        idx = self._positions.get(user_id)
        if idx is None:
            self._positions[user_id] = len(votes)
            votes.append(Vote(user_id=user_id, value=value))
            return None
        previous = votes[idx].value
        votes[idx].value = value
        return previous

    def upvote(self, user_id: str) -> None:
        """Record a LIKE for ``user_id``.

        The counter moves only on a transition into LIKE; re-upvoting is a no-op.
        """
        if self._set(user_id, VoteValue.LIKE) is not VoteValue.LIKE:
            self.likes_count += 1

    def downvote(self, user_id: str) -> None:
        """Record a DISLIKE for ``user_id``."""
        if self._set(user_id, VoteValue.DISLIKE) is VoteValue.LIKE:
            self.likes_count -= 1

    def unvote(self, user_id: str) -> None:
        """Drop the vote of ``user_id``; no-op when the user has not voted."""
        votes = self._require_votes()
        idx = self._positions.pop(user_id, None)
        if idx is None:
            return
        removed = votes[idx]
        last = votes.pop()
        if idx < len(votes):
            votes[idx] = last
            self._positions[last.user_id] = idx
        if removed.value is VoteValue.LIKE:
            self.likes_count -= 1

    def to_document(self) -> dict[str, Any] | None:
        if self._votes is None:
            return None
        return {
            "list": [vote.to_document() for vote in self._votes],
            "likes_count": self.likes_count,
        }

    @classmethod
    def from_document(cls, data: dict[str, Any] | None) -> VoteList:
        if data is None or data.get("list") is None:
            return cls(None)
        return cls(Vote.from_document(item) for item in data["list"])

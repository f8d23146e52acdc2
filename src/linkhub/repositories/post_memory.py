"""Process-local post storage."""
from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from linkhub.core.errors import SUCCESS, NotFoundError, StatusMessage, UnauthorizedError
from linkhub.models.comment import Comment
from linkhub.models.post import Post
from linkhub.repositories.post_repo import PostRepository, by_newest, by_ranking

__all__ = ["PostMemoryRepository", "ReadWriteLock"]

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Lock admitting many readers or a single writer.

    A waiting writer blocks new readers, so a steady stream of overlapping
    reads cannot keep it out.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False
        self._writers_waiting = 0

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            self._cond.wait_for(lambda: not self._writing and not self._writers_waiting)
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                self._cond.wait_for(lambda: not self._writing and not self._readers)
            finally:
                self._writers_waiting -= 1
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class PostMemoryRepository(PostRepository):
    """Posts kept in a dict guarded by one coarse readers-writer lock.

    Posts handed out are deep copies, so callers can never change stored
    state without going through the lock.
    """

    def __init__(self) -> None:
        self._posts: dict[str, Post] = {}
        self._lock = ReadWriteLock()

    def _snapshot(self, predicate: Callable[[Post], bool] | None = None) -> list[Post]:
        with self._lock.read():
            return [
                copy.deepcopy(post)
                for post in self._posts.values()
                if predicate is None or predicate(post)
            ]

    def _find(self, post_id: str) -> Post:
        post = self._posts.get(post_id)
        if post is None:
            raise NotFoundError("post not found")
        return post

    def _mutate(self, post_id: str, change: Callable[[Post], None]) -> Post:
        with self._lock.write():
            post = self._find(post_id)
            # Apply to a copy first so a failed change leaves the stored post intact.
            updated = copy.deepcopy(post)
            change(updated)
            self._posts[post_id] = updated
            return copy.deepcopy(updated)

    def get_all(self) -> list[Post]:
        return by_ranking(self._snapshot())

    def add_post(self, post: Post) -> None:
        with self._lock.write():
            self._posts[post.id] = copy.deepcopy(post)

    def get_by_category(self, category: str) -> list[Post]:
        return by_ranking(self._snapshot(lambda post: post.category.value == category))

    def get_by_id(self, post_id: str) -> Post:
        def count_view(post: Post) -> None:
            post.views += 1

        return self._mutate(post_id, count_view)

    def delete_post(self, post_id: str, requester_id: str) -> StatusMessage:
        with self._lock.write():
            post = self._find(post_id)
            if post.author.id != requester_id:
                raise UnauthorizedError()
            del self._posts[post_id]
        logger.debug("removed post %s from memory store", post_id)
        return SUCCESS

    def add_comment(self, post_id: str, comment: Comment) -> Post:
        return self._mutate(post_id, lambda post: post.add_comment(comment))

    def delete_comment(self, post_id: str, comment_id: str, requester_id: str) -> Post:
        return self._mutate(
            post_id,
            lambda post: post.delete_comment(comment_id, requester_id),
        )

    def upvote_post(self, post_id: str, requester_id: str) -> Post:
        return self._mutate(post_id, lambda post: post.upvote(requester_id))

    def downvote_post(self, post_id: str, requester_id: str) -> Post:
        return self._mutate(post_id, lambda post: post.downvote(requester_id))

    def unvote_post(self, post_id: str, requester_id: str) -> Post:
        return self._mutate(post_id, lambda post: post.unvote(requester_id))

    def get_by_user(self, username: str) -> list[Post]:
        return by_newest(self._snapshot(lambda post: post.author.username == username))

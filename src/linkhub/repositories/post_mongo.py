"""MongoDB-backed post storage."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from linkhub.core.errors import (
    SUCCESS,
    NotFoundError,
    StatusMessage,
    StorageError,
    UnauthorizedError,
)
from linkhub.core.settings import Settings
from linkhub.models.comment import Comment
from linkhub.models.post import Post
from linkhub.repositories.post_repo import PostRepository, by_newest, by_ranking

__all__ = ["PostMongoRepository"]

logger = logging.getLogger(__name__)

# Mongo's own key never leaves the store; posts are addressed by "id".
_PROJECTION = {"_id": 0}


@contextmanager
def _driver_errors(action: str) -> Iterator[None]:
    try:
        yield
    except PyMongoError as exc:
        logger.error("mongo %s failed: %s", action, exc)
        raise StorageError(f"mongo {action} err") from exc


class PostMongoRepository(PostRepository):
    """Posts stored one document each in a MongoDB collection.

    Updates follow read-modify-write without any version check: two
    concurrent mutations of the same post both read the old document and
    the later write wins, dropping the earlier change.
    """

    def __init__(self, collection: Collection) -> None:
        self._collection = collection

    @classmethod
    def from_settings(cls, settings: Settings) -> PostMongoRepository:
        """Connect to the collection named in ``settings``."""
        client: MongoClient = MongoClient(
            settings.mongo_url,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            tz_aware=True,
        )
        collection = client[settings.mongo_database][settings.mongo_collection]
        with _driver_errors("create index"):
            collection.create_index("id", unique=True)
        return cls(collection)

    def _find_posts(self, query: dict[str, Any]) -> list[Post]:
        with _driver_errors("find"):
            documents = list(self._collection.find(query, _PROJECTION))
        return [Post.from_document(doc) for doc in documents]

    def _find_post(self, post_id: str) -> Post:
        with _driver_errors("find one"):
            document = self._collection.find_one({"id": post_id}, _PROJECTION)
        if document is None:
            raise NotFoundError("post not found")
        return Post.from_document(document)

    def _set_fields(self, post_id: str, fields: dict[str, Any]) -> None:
        with _driver_errors("update one"):
            self._collection.update_one({"id": post_id}, {"$set": fields})

    def _update(
        self,
        post_id: str,
        change: Callable[[Post], None],
        fields: Callable[[Post], dict[str, Any]],
    ) -> Post:
        post = self._find_post(post_id)
        change(post)
        self._set_fields(post_id, fields(post))
        return post

    def get_all(self) -> list[Post]:
        return by_ranking(self._find_posts({}))

    def add_post(self, post: Post) -> None:
        with _driver_errors("insert one"):
            self._collection.insert_one(post.to_document())

    def get_by_category(self, category: str) -> list[Post]:
        return by_ranking(self._find_posts({"category": category}))

    def get_by_id(self, post_id: str) -> Post:
        def count_view(post: Post) -> None:
            post.views += 1

        return self._update(post_id, count_view, lambda post: {"views": post.views})

    def delete_post(self, post_id: str, requester_id: str) -> StatusMessage:
        post = self._find_post(post_id)
        if post.author.id != requester_id:
            raise UnauthorizedError()
        with _driver_errors("delete one"):
            self._collection.delete_one({"id": post_id})
        return SUCCESS

    def add_comment(self, post_id: str, comment: Comment) -> Post:
        return self._update(
            post_id,
            lambda post: post.add_comment(comment),
            lambda post: {"comments": post.comments.to_document()},
        )

    def delete_comment(self, post_id: str, comment_id: str, requester_id: str) -> Post:
        return self._update(
            post_id,
            lambda post: post.delete_comment(comment_id, requester_id),
            lambda post: {"comments": post.comments.to_document()},
        )

    def upvote_post(self, post_id: str, requester_id: str) -> Post:
        return self._update(post_id, lambda post: post.upvote(requester_id), Post.vote_fields)

    def downvote_post(self, post_id: str, requester_id: str) -> Post:
        return self._update(post_id, lambda post: post.downvote(requester_id), Post.vote_fields)

    def unvote_post(self, post_id: str, requester_id: str) -> Post:
        return self._update(post_id, lambda post: post.unvote(requester_id), Post.vote_fields)

    def get_by_user(self, username: str) -> list[Post]:
        return by_newest(self._find_posts({"author.username": username}))

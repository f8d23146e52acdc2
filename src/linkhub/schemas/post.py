"""Post-related Pydantic schemas."""

import datetime
from typing import Any

from pydantic import BaseModel, Field, SerializerFunctionWrapHandler, model_serializer

from linkhub.models.comment import Comment
from linkhub.models.post import Post, PostCategory, PostType
from linkhub.models.user import User
from linkhub.models.vote import Vote


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    type: PostType
    category: PostCategory
    title: str = Field(..., min_length=1, description="Post title")
    url: str = Field("", description="Target of a link post")
    text: str = Field("", description="Body of a text post")


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    comment: str = ""


class VoteResponse(BaseModel):
    """One entry of a post's vote list."""

    user: str
    vote: int

    @classmethod
    def from_vote(cls, vote: Vote) -> "VoteResponse":
        return cls(user=vote.user_id, vote=int(vote.value))


class CommentResponse(BaseModel):
    """Schema for comment information returned by the API."""

    created: datetime.datetime
    author: User
    body: str
    id: str

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls(
            created=comment.created,
            author=comment.author,
            body=comment.body,
            id=comment.id,
        )


class PostResponse(BaseModel):
    """Schema for post information returned by the API.

    ``votes`` is a bare array; ``url`` and ``text`` are omitted when empty.
    """

    score: int
    views: int
    type: PostType
    title: str
    url: str = ""
    author: User
    category: PostCategory
    text: str = ""
    votes: list[VoteResponse]
    comments: list[CommentResponse]
    created: datetime.datetime
    likes_percent: int = Field(serialization_alias="upvotePercentage")
    id: str

    @model_serializer(mode="wrap")
    def _omit_empty_content(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for key in ("url", "text"):
            if not data.get(key):
                data.pop(key, None)
        return data

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        """Convert a post aggregate to its wire shape."""
        return cls(
            score=post.score,
            views=post.views,
            type=post.type,
            title=post.title,
            url=post.url,
            author=post.author,
            category=post.category,
            text=post.text,
            votes=[VoteResponse.from_vote(vote) for vote in post.votes],
            comments=[CommentResponse.from_comment(comment) for comment in post.comments],
            created=post.created,
            likes_percent=post.likes_percent,
            id=post.id,
        )

# src/linkhub/api/endpoints/posts.py
"""Post, comment and vote endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from linkhub.api.dependencies import CommentIdDep, CurrentUserDep, PostIdDep, PostRepoDep
from linkhub.core.errors import FieldError, ValidationFailedError
from linkhub.models.comment import Comment
from linkhub.models.post import Post
from linkhub.schemas.post import CommentCreate, PostCreate, PostResponse

router = APIRouter(tags=["posts"])
logger = logging.getLogger(__name__)


def _to_responses(posts: list[Post]) -> list[PostResponse]:
    return [PostResponse.from_post(post) for post in posts]


@router.get("/posts/", response_model=list[PostResponse])
def list_posts(repo: PostRepoDep) -> list[PostResponse]:
    """List every post, best ranked first.

    Args:
        repo: Post storage

    Returns:
        All posts ordered by score, oldest first on ties
    """
    posts = repo.get_all()
    logger.info("listed all posts")
    return _to_responses(posts)


@router.post("/posts", response_model=PostResponse)
def create_post(
    payload: PostCreate,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
) -> PostResponse:
    """Publish a post on behalf of the caller.

    The author's own upvote is recorded with the post.

    Args:
        payload: Post type, category, title and its url or text
        current_user: Authenticated author
        repo: Post storage

    Returns:
        The stored post
    """
    post = Post.new(
        current_user,
        type=payload.type,
        category=payload.category,
        title=payload.title,
        url=payload.url,
        text=payload.text,
    )
    repo.add_post(post)
    logger.info("created post: id=%s", post.id)
    return PostResponse.from_post(post)


@router.get("/posts/{category_name}", response_model=list[PostResponse])
def list_posts_by_category(category_name: str, repo: PostRepoDep) -> list[PostResponse]:
    """List the posts of one category, best ranked first.

    Args:
        category_name: Category to filter on; unknown names match nothing
        repo: Post storage
    """
    posts = repo.get_by_category(category_name)
    logger.info("listed posts by: category=%s", category_name)
    return _to_responses(posts)


@router.get("/post/{post_id}", response_model=PostResponse)
def show_post(post_id: PostIdDep, repo: PostRepoDep) -> PostResponse:
    """Return one post and count the view.

    Args:
        post_id: ID of the post to show
        repo: Post storage

    Returns:
        The post with its view counter already incremented

    Raises:
        NotFoundError: No post has this id
    """
    post = repo.get_by_id(post_id)
    logger.info("showed post: id=%s", post_id)
    return PostResponse.from_post(post)


@router.delete("/post/{post_id}")
def delete_post(
    post_id: PostIdDep,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
) -> dict[str, str]:
    """Delete a post written by the caller.

    Args:
        post_id: ID of the post to delete
        current_user: Authenticated user (must be post author)
        repo: Post storage

    Returns:
        ``{"message": "success"}``

    Raises:
        NotFoundError: No post has this id
        UnauthorizedError: The caller did not write the post
    """
    result = repo.delete_post(post_id, current_user.id)
    logger.info("deleted post: id=%s", post_id)
    return result.to_body()


@router.post("/post/{post_id}", response_model=PostResponse)
def create_comment(
    post_id: PostIdDep,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
) -> PostResponse:
    """Comment on a post.

    Args:
        post_id: ID of the post to comment on
        payload: Comment body; empty bodies are rejected
        current_user: Authenticated comment author
        repo: Post storage

    Returns:
        The post including the new comment

    Raises:
        ValidationFailedError: The comment body is empty
        NotFoundError: No post has this id
    """
    if not payload.comment:
        raise ValidationFailedError(
            [FieldError(location="body", param="comment", msg="is required")]
        )
    comment = Comment(author=current_user, body=payload.comment)
    post = repo.add_comment(post_id, comment)
    logger.info("created comment: id=%s", comment.id)
    return PostResponse.from_post(post)


@router.delete("/post/{post_id}/{comment_id}", response_model=PostResponse)
def delete_comment(
    post_id: PostIdDep,
    comment_id: CommentIdDep,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
) -> PostResponse:
    """Remove a comment written by the caller.

    Args:
        post_id: ID of the post holding the comment
        comment_id: ID of the comment to remove
        current_user: Authenticated user (must be comment author)
        repo: Post storage

    Returns:
        The post without the comment

    Raises:
        NotFoundError: Unknown post or comment
        UnauthorizedError: The caller did not write the comment
    """
    post = repo.delete_comment(post_id, comment_id, current_user.id)
    logger.info("deleted comment: id=%s", comment_id)
    return PostResponse.from_post(post)


@router.get("/post/{post_id}/upvote", response_model=PostResponse)
def upvote_post(
    post_id: PostIdDep,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
) -> PostResponse:
    """Record a like from the caller.

    Upvoting a post the caller already likes changes nothing.

    Args:
        post_id: ID of the post to vote on
        current_user: Authenticated voter
        repo: Post storage

    Returns:
        The post with its refreshed score and vote list
    """
    post = repo.upvote_post(post_id, current_user.id)
    logger.info("upvoted post: id=%s", post_id)
    return PostResponse.from_post(post)


@router.get("/post/{post_id}/downvote", response_model=PostResponse)
def downvote_post(
    post_id: PostIdDep,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
) -> PostResponse:
    """Record a dislike from the caller, replacing any earlier vote.

    Args:
        post_id: ID of the post to vote on
        current_user: Authenticated voter
        repo: Post storage

    Returns:
        The post with its refreshed score and vote list
    """
    post = repo.downvote_post(post_id, current_user.id)
    logger.info("downvoted post: id=%s", post_id)
    return PostResponse.from_post(post)


@router.get("/post/{post_id}/unvote", response_model=PostResponse)
def unvote_post(
    post_id: PostIdDep,
    current_user: CurrentUserDep,
    repo: PostRepoDep,
) -> PostResponse:
    """Withdraw the caller's vote; a no-op when there is none."""
    post = repo.unvote_post(post_id, current_user.id)
    logger.info("unvoted post: id=%s", post_id)
    return PostResponse.from_post(post)


@router.get("/user/{username}", response_model=list[PostResponse])
def list_posts_by_user(username: str, repo: PostRepoDep) -> list[PostResponse]:
    """List the posts of one author, newest first."""
    posts = repo.get_by_user(username)
    logger.info("listed posts by: username=%s", username)
    return _to_responses(posts)

"""Shared API dependencies for authentication and storage access."""

from typing import Annotated

from fastapi import Depends, Header, Request

from linkhub.core.errors import BadRequestError
from linkhub.models.user import User
from linkhub.repositories.post_repo import PostRepository
from linkhub.repositories.user_repo import UserRepository
from linkhub.services.session import SessionManager
from linkhub.utils.ids import is_valid_id


def get_post_repo(request: Request) -> PostRepository:
    """Return the post repository the application was built with."""
    return request.app.state.post_repo


def get_user_repo(request: Request) -> UserRepository:
    """Return the user repository the application was built with."""
    return request.app.state.user_repo


def get_session_manager(request: Request) -> SessionManager:
    """Return the session manager the application was built with."""
    return request.app.state.session_manager


PostRepoDep = Annotated[PostRepository, Depends(get_post_repo)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repo)]
SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]


def get_current_user(
    sessions: SessionManagerDep,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the caller from the ``Authorization: Bearer <token>`` header.

    Raises:
        UnauthorizedError: The header is missing or the session is invalid.
    """
    return sessions.check(authorization)


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def valid_post_id(post_id: str) -> str:
    """Reject malformed post ids before any storage lookup."""
    if not is_valid_id(post_id):
        raise BadRequestError("invalid post id")
    return post_id


def valid_comment_id(comment_id: str) -> str:
    """Reject malformed comment ids before any storage lookup."""
    if not is_valid_id(comment_id):
        raise BadRequestError("invalid comment id")
    return comment_id


PostIdDep = Annotated[str, Depends(valid_post_id)]
CommentIdDep = Annotated[str, Depends(valid_comment_id)]

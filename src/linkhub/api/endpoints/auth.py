# src/linkhub/api/endpoints/auth.py
"""Registration and login endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from linkhub.api.dependencies import SessionManagerDep, UserRepoDep
from linkhub.schemas.user import Credentials, SessionResponse

router = APIRouter(tags=["authentication"])
logger = logging.getLogger(__name__)


@router.post("/register", response_model=SessionResponse)
def register(
    credentials: Credentials,
    users: UserRepoDep,
    sessions: SessionManagerDep,
) -> SessionResponse:
    """Create an account and open a session for it.

    Args:
        credentials: Username and password of the new account
        users: User storage
        sessions: Session manager issuing the token

    Returns:
        The token of the new session

    Raises:
        ValidationFailedError: The username is already taken
    """
    user = users.sign_up(credentials.username, credentials.password)
    session = sessions.create(user)
    logger.info("registered user: username=%s id=%s", user.username, user.id)
    return SessionResponse(token=session.token)


@router.post("/login", response_model=SessionResponse)
def login(
    credentials: Credentials,
    users: UserRepoDep,
    sessions: SessionManagerDep,
) -> SessionResponse:
    """Check credentials and open a session.

    Raises:
        UnauthorizedError: Unknown username or wrong password
    """
    user = users.authorize(credentials.username, credentials.password)
    session = sessions.create(user)
    logger.info("logged user: username=%s id=%s", user.username, user.id)
    return SessionResponse(token=session.token)

"""Session issuance and verification.

A session is a signed JWT carrying a snapshot of the user and a session id.
Only the session id is persisted; removing its row revokes the session even
while the token itself is still cryptographically valid.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from linkhub.core.errors import InternalError, StorageError, UnauthorizedError
from linkhub.core.settings import Settings
from linkhub.models.session import SessionRecord
from linkhub.models.user import User
from linkhub.utils.ids import new_id

__all__ = ["SessionManager", "SessionToken"]

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


@dataclass(frozen=True)
class SessionToken:
    """A freshly issued session."""

    token: str
    session_id: str


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionManager:
    """Issue and check session tokens backed by the ``sessions`` table.

    ``clock`` supplies the current time both when a token is issued and when
    its expiry is checked.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        *,
        secret_key: str,
        algorithm: str = "HS256",
        ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._session_factory = session_factory
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session_factory: sessionmaker[Session],
    ) -> SessionManager:
        return cls(
            session_factory,
            secret_key=settings.secret_key,
            algorithm=settings.jwt_algorithm,
            ttl=timedelta(seconds=settings.session_ttl_seconds),
        )

    def _encode(self, user: User, session_id: str) -> str:
        issued_at = self._clock()
        claims: dict[str, Any] = {
            "user": user.model_dump(),
            "session_id": session_id,
            "iat": issued_at,
            "exp": issued_at + self._ttl,
        }
        try:
            return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
        except JWTError as exc:
            raise InternalError("jwt sign err") from exc

    def create(self, user: User | None) -> SessionToken:
        """Issue a token for ``user`` and persist its session id."""
        if user is None:
            raise InternalError("nil input user")
        session_id = new_id()
        token = self._encode(user, session_id)
        try:
            with self._session_factory() as db:
                db.add(SessionRecord(session_id=session_id))
                db.commit()
        except SQLAlchemyError as exc:
            raise StorageError("sql insert session err") from exc
        logger.debug("opened session %s for user %s", session_id, user.id)
        return SessionToken(token=token, session_id=session_id)

    def _decode(self, token: str) -> tuple[User, str]:
        try:
            # Expiry is checked against the injected clock, not jose's wall clock.
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
            expires_at = float(claims["exp"])
            user = User.model_validate(claims["user"])
            session_id = claims["session_id"]
        except (JWTError, ValidationError, KeyError, TypeError, ValueError) as exc:
            # Callers only learn that the token was rejected, never why.
            logger.info("rejected session token: %s", exc)
            raise UnauthorizedError() from exc
        if expires_at < self._clock().timestamp():
            logger.info("rejected expired session %s", session_id)
            raise UnauthorizedError()
        if not isinstance(session_id, str):
            raise UnauthorizedError()
        return user, session_id

    def check(self, authorization: str | None) -> User:
        """Return the user of a valid ``Bearer <token>`` header value.

        The user comes from the token itself, not from the user store, so
        it reflects the account as it was when the session was created.

        Raises:
            UnauthorizedError: Malformed header, bad signature, expired token
                or revoked session.
            StorageError: The session lookup itself failed.
        """
        fields = (authorization or "").split()
        if len(fields) != 2 or fields[0] != BEARER_SCHEME:
            raise UnauthorizedError()
        user, session_id = self._decode(fields[1])
        try:
            with self._session_factory() as db:
                record = db.get(SessionRecord, session_id)
        except SQLAlchemyError as exc:
            raise StorageError("sql select session err") from exc
        if record is None:
            raise UnauthorizedError()
        return user

    def revoke(self, session_id: str) -> None:
        """Forget ``session_id``; tokens carrying it stop being accepted."""
        try:
            with self._session_factory() as db:
                db.execute(delete(SessionRecord).where(SessionRecord.session_id == session_id))
                db.commit()
        except SQLAlchemyError as exc:
            raise StorageError("sql delete session err") from exc

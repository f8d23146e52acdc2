"""Data access for user accounts."""
from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from linkhub.core.errors import FieldError, StorageError, UnauthorizedError, ValidationFailedError
from linkhub.models.user import User, UserAccount
from linkhub.utils.ids import new_id

__all__ = ["UserMemoryRepository", "UserRepository", "UserSQLRepository"]

logger = logging.getLogger(__name__)


def _username_taken(username: str) -> ValidationFailedError:
    return ValidationFailedError(
        [FieldError(location="body", param="username", value=username, msg="already exists")]
    )


def _check_password(user: User, password: str) -> User:
    # Plain comparison; passwords are stored as given.
    if user.password != password:
        raise UnauthorizedError("invalid password")
    return user


class UserRepository(ABC):
    """Lookup and registration of users."""

    @abstractmethod
    def authorize(self, username: str, password: str) -> User:
        """Return the user matching the credentials.

        Raises:
            UnauthorizedError: Unknown username or wrong password.
        """

    @abstractmethod
    def sign_up(self, username: str, password: str) -> User:
        """Register a new user.

        Raises:
            ValidationFailedError: The username is already taken.
        """


class UserMemoryRepository(UserRepository):
    """Users kept in a dict keyed by username."""

    def __init__(self, users: list[User] | None = None) -> None:
        self._users: dict[str, User] = {user.username: user for user in users or ()}
        self._lock = threading.Lock()

    def authorize(self, username: str, password: str) -> User:
        with self._lock:
            user = self._users.get(username)
        if user is None:
            raise UnauthorizedError("user not found")
        return _check_password(user, password)

    def sign_up(self, username: str, password: str) -> User:
        with self._lock:
            if username in self._users:
                raise _username_taken(username)
            user = User(username=username, id=new_id(), password=password)
            self._users[username] = user
        return user


class UserSQLRepository(UserRepository):
    """Users stored in the ``users`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def _get(self, db: Session, username: str) -> UserAccount | None:
        return db.execute(
            select(UserAccount).where(UserAccount.username == username)
        ).scalar_one_or_none()

    def authorize(self, username: str, password: str) -> User:
        try:
            with self._session_factory() as db:
                account = self._get(db, username)
                user = account.to_user() if account is not None else None
        except SQLAlchemyError as exc:
            raise StorageError("sql select user err") from exc
        if user is None:
            raise UnauthorizedError("user not found")
        return _check_password(user, password)

    def sign_up(self, username: str, password: str) -> User:
        user = User(username=username, id=new_id(), password=password)
        account = UserAccount(username=user.username, id=user.id, password=user.password)
        try:
            with self._session_factory() as db:
                if self._get(db, username) is not None:
                    raise _username_taken(username)
                db.add(account)
                db.commit()
        except IntegrityError as exc:
            # Lost a race against a concurrent registration of the same name.
            raise _username_taken(username) from exc
        except SQLAlchemyError as exc:
            raise StorageError("sql insert user err") from exc
        logger.debug("stored user %s", username)
        return user

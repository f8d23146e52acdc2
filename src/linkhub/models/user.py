# src/linkhub/models/user.py
"""User identity: the immutable value type and its relational record."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from linkhub.db.session import Base


class User(BaseModel):
    """A registered user.

    The password never leaves the server: it is excluded from every
    serialization, including the user snapshot embedded in session tokens
    and the author embedded in stored posts.
    """

    model_config = ConfigDict(frozen=True, from_attributes=True)

    username: str
    id: str
    password: str = Field(default="", exclude=True, repr=False)


class UserAccount(Base):
    """Persisted user row keyed by username."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(255), primary_key=True)
    id: Mapped[str] = mapped_column(String(24), unique=True, nullable=False)
    # Stored and compared as plain text, see DESIGN.md.
    password: Mapped[str] = mapped_column(Text, nullable=False)

    def to_user(self) -> User:
        """Return the value type for this row."""
        return User(username=self.username, id=self.id, password=self.password)

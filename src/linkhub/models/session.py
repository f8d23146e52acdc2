# src/linkhub/models/session.py
"""Server-side session records."""

from __future__ import annotations

import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from linkhub.db.session import Base


class SessionRecord(Base):
    """A live session.

    Only the session id is kept; the signed token itself is never stored.
    Deleting the row revokes every token carrying this id.
    """

    __tablename__ = "sessions"

    session_id: Mapped[str] = mapped_column(String(24), primary_key=True)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.datetime.now(datetime.UTC),
    )

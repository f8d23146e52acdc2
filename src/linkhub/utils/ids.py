"""Opaque identifier generation."""
from __future__ import annotations

import secrets

ID_LENGTH = 24


def new_id() -> str:
    """Return a random 24-character hex identifier."""
    return secrets.token_hex(ID_LENGTH // 2)


def is_valid_id(value: str) -> bool:
    """Return True if ``value`` has the shape of an identifier issued by ``new_id``."""
    return len(value) == ID_LENGTH

"""Authentication request/response schemas."""

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    """Body of the login and register requests."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    """Signed session token handed to the client."""

    token: str

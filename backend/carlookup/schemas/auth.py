from typing import List

from pydantic import Field

from carlookup.schemas.base import CamelModel


class LoginRequest(CamelModel):
    username: str = Field(default="")
    password: str = Field(default="")


class TokenResponse(CamelModel):
    """Issued bearer token; `expires_in` is in seconds."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    roles: List[str] = Field(default_factory=list)

"""
CarLookup Backend: Authentication & Authorization
==================================================

What:  Bearer-token authentication and role policies as FastAPI dependencies.
How:   `get_current_user` reads the Authorization header, validates the JWT
       and returns its claims. `require_roles(...)` wraps it with a role-set
       membership check.

Policies list their allowed roles explicitly; there is no role hierarchy
in the check itself:

    ADMIN_ONLY       = {admin}
    EDITOR_OR_ABOVE  = {admin, editor}
    READER_OR_ABOVE  = {admin, editor, reader}

Failures raise AuthenticationRequiredError (401) or ForbiddenError (403);
the mapping chain renders both.
"""

from typing import Callable, Optional, Sequence

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from carlookup.dependencies import get_token_service
from carlookup.exceptions import AuthenticationRequiredError, ForbiddenError
from carlookup.services.token_service import TokenClaims, TokenService

ADMIN = "admin"
EDITOR = "editor"
READER = "reader"

ADMIN_ONLY = (ADMIN,)
EDITOR_OR_ABOVE = (ADMIN, EDITOR)
READER_OR_ABOVE = (ADMIN, EDITOR, READER)

# auto_error=False: a missing header must reach our 401 envelope, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    if credentials is None or not credentials.credentials:
        raise AuthenticationRequiredError(context={"reason": "missing bearer token"})

    claims = tokens.read_claims(credentials.credentials)
    if claims is None:
        raise AuthenticationRequiredError(context={"reason": "invalid bearer token"})
    return claims


def require_roles(allowed_roles: Sequence[str]) -> Callable:
    """Dependency factory: authenticated caller holding at least one allowed role."""
    allowed = tuple(allowed_roles)

    async def dependency(user: TokenClaims = Depends(get_current_user)) -> TokenClaims:
        if not any(role in allowed for role in user.roles):
            raise ForbiddenError(allowed, context={"username": user.username, "roles": user.roles})
        return user

    return dependency


require_admin = require_roles(ADMIN_ONLY)
require_editor = require_roles(EDITOR_OR_ABOVE)
require_reader = require_roles(READER_OR_ABOVE)

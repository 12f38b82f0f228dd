"""
CarLookup Backend: Auth Manager
================================

What:  Exchanges a username/password for a signed bearer token.

Failure messages are chosen so callers cannot probe for usernames: an
unknown user and a wrong password both produce "Invalid credentials".
"""

import logging

from carlookup.exceptions import UnauthorizedError
from carlookup.schemas.auth import LoginRequest, TokenResponse
from carlookup.services.password_service import PasswordService
from carlookup.services.token_service import TokenService
from carlookup.unit_of_work import UnitOfWork
from carlookup.validators import ensure_valid, validate_login_request

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
ACCOUNT_INACTIVE = "Account is inactive"


class AuthManager:
    def __init__(
        self,
        uow: UnitOfWork,
        passwords: PasswordService,
        tokens: TokenService,
    ):
        self.uow = uow
        self.passwords = passwords
        self.tokens = tokens

    async def authenticate(self, request: LoginRequest) -> TokenResponse:
        ensure_valid(validate_login_request(request))
        username = request.username.strip()

        user = await self.uow.users.get_by_username(username)
        if user is None:
            logger.info("Login rejected: unknown or inactive user %r", username)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not self.passwords.verify_password(request.password, user.salt, user.password_hash):
            logger.info("Login rejected: bad password for %r", username)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if not user.is_active:
            raise UnauthorizedError(ACCOUNT_INACTIVE)

        roles = user.role_names
        token = self.tokens.generate_token(user.username, roles)
        logger.info("Issued token for %r with roles %s", user.username, roles)
        return TokenResponse(
            access_token=token,
            token_type="Bearer",
            expires_in=self.tokens.get_expiration_seconds(),
            roles=roles,
        )

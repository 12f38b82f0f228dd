"""
CarLookup Backend: Authentication Route
========================================

POST /api/v1/auth/token exchanges credentials for a bearer token.
"""

import logging

from fastapi import APIRouter, Depends

from carlookup.dependencies import get_auth_manager
from carlookup.managers import AuthManager
from carlookup.schemas.auth import LoginRequest, TokenResponse
from carlookup.schemas.envelope import ApiResponse, ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


@router.post(
    "/token",
    response_model=ApiResponse[TokenResponse],
    summary="Obtain a bearer token",
    description=(
        "Validates username and password and returns a signed JWT carrying the "
        "user's roles. Unknown users and wrong passwords get the same 401."
    ),
)
async def issue_token(
    request: LoginRequest,
    manager: AuthManager = Depends(get_auth_manager),
) -> ApiResponse[TokenResponse]:
    logger.info("Authentication attempt for %r", request.username)
    token = await manager.authenticate(request)
    return ok(token, "Authentication successful")

"""
Authorization dependencies for FastAPI
Gates state-changing product routes to admin bearer tokens
"""

from typing import Optional

import jwt
from fastapi import Depends, Header, Request
from pydantic import ValidationError

from insurance_api.core.config import config
from insurance_api.core.errors import UnauthorizedError
from insurance_api.core.logger import logger
from insurance_api.models.claims import TokenClaims
from insurance_api.services.token import TokenService, get_token_service

READ_METHODS = frozenset({"GET"})

NO_TOKEN_MESSAGE = "No token found"
INVALID_FORMAT_MESSAGE = "Invalid token format"
INVALID_TOKEN_MESSAGE = "Invalid or expired token"
NO_ROLE_MESSAGE = "No role found in token"
ADMIN_ONLY_MESSAGE = "Only admin can access this route"


def authorize_request(
    method: str,
    authorization: Optional[str],
    token_service: TokenService,
    admin_role: str = "admin",
) -> TokenClaims:
    """
    Decide whether a request may proceed based on its bearer token.

    Args:
        method: HTTP method of the request
        authorization: Raw Authorization header value
        token_service: Verifier for the bearer token
        admin_role: Role allowed to call non-read routes

    Returns:
        The verified token claims

    Raises:
        UnauthorizedError: at the first failing check
    """
    if not authorization:
        raise UnauthorizedError(NO_TOKEN_MESSAGE)

    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        raise UnauthorizedError(INVALID_FORMAT_MESSAGE)

    try:
        claims = token_service.verify(token)
    except (jwt.InvalidTokenError, ValidationError) as e:
        logger.warning(
            f"Token verification failed: {e}",
            metadata={"event": "token_rejected", "reason": type(e).__name__}
        )
        raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from None

    if not claims.role:
        raise UnauthorizedError(NO_ROLE_MESSAGE)

    if method.upper() not in READ_METHODS and not claims.has_role(admin_role):
        logger.warning(
            "Admin access denied",
            metadata={"event": "admin_access_denied", "sub": claims.sub, "role": claims.role}
        )
        raise UnauthorizedError(ADMIN_ONLY_MESSAGE)

    return claims


async def require_role(
    request: Request,
    authorization: Optional[str] = Header(None),
    token_service: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """
    Dependency that authorizes the request and exposes the caller's role
    as ``request.state.user_role``.

    Usage:
        @router.post("/create", dependencies=[Depends(require_role)])
    """
    claims = authorize_request(request.method, authorization, token_service, config.admin_role)
    request.state.user_role = claims.role
    logger.debug(
        "Request authorized",
        metadata={"event": "request_authorized", "sub": claims.sub, "role": claims.role}
    )
    return claims


def ensure_admin(request: Request) -> None:
    """Route-level admin check on the role attached by require_role"""
    if getattr(request.state, "user_role", None) != config.admin_role:
        raise UnauthorizedError(ADMIN_ONLY_MESSAGE)

"""Bearer-token authentication dependencies.

get_current_user_required rejects the request when no identity can be
established; get_current_user degrades to an anonymous caller instead.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from api.dependencies import get_token_service, get_user_repo
from domain.model.errors import StoreUnavailableError, TokenExpiredError, TokenError
from domain.model.user import User
from port.user_repository import UserRepository
from services.token_service import TokenService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthenticated(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
    user_repo: UserRepository = Depends(get_user_repo),
) -> Optional[User]:
    """Get current authenticated user (optional). Returns None on any failure."""
    if not credentials:
        return None

    try:
        claims = tokens.verify(credentials.credentials)
        return user_repo.get_by_id(claims.user_id)
    except Exception as e:
        logger.debug("Optional authentication skipped", extra={"reason": type(e).__name__})
        return None


def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenService = Depends(get_token_service),
    user_repo: UserRepository = Depends(get_user_repo),
) -> User:
    """Get current authenticated user (required). Raises 401 if not authenticated."""
    if not credentials:
        raise _unauthenticated("Access denied. No token provided.")

    try:
        claims = tokens.verify(credentials.credentials)
    except TokenExpiredError:
        raise _unauthenticated("Token expired.")
    except TokenError:
        raise _unauthenticated("Invalid token.")

    try:
        user = user_repo.get_by_id(claims.user_id)
    except StoreUnavailableError:
        logger.exception("Auth user lookup failed", extra={"userId": claims.user_id})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error during authentication.",
        )

    if not user:
        raise _unauthenticated("Invalid token. User not found.")

    return user

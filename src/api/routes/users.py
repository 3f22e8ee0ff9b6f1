"""Profile routes for the authenticated user.

Endpoints:
- GET /user/profile: Current profile (fresh read)
- PUT /user/profile: Partial update of firstName / lastName / phone
- DELETE /user/profile: Delete the account
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_user_repo
from api.models import (
    MessageResponse,
    ProfileResponse,
    ProfileUpdateResponse,
    UpdateProfileRequest,
    UserResponse,
)
from api.security import get_current_user_required
from domain.model.errors import NotFoundError, StoreUnavailableError
from domain.model.user import ProfileUpdate, User
from port.user_repository import UserRepository
from services import account_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


def _user_gone() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid token. User not found.",
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.get("/profile", response_model=ProfileResponse)
def get_profile(
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Get the current user's profile."""
    try:
        user = account_service.get_profile(repo, current_user.id)
    except NotFoundError:
        raise _user_gone()
    except StoreUnavailableError:
        logger.exception("Profile error", extra={"userId": current_user.id})
        raise HTTPException(status_code=500, detail="Failed to fetch profile")

    return ProfileResponse(user=UserResponse.from_domain(user))


@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    request: UpdateProfileRequest,
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Update first name, last name and/or phone."""
    changes = ProfileUpdate(
        first_name=request.first_name,
        last_name=request.last_name,
        phone=str(request.phone) if request.phone is not None else None,
    )
    try:
        user = account_service.update_profile(repo, current_user, changes)
    except NotFoundError:
        raise _user_gone()
    except StoreUnavailableError:
        logger.exception("Update profile error", extra={"userId": current_user.id})
        raise HTTPException(status_code=500, detail="Failed to update profile")

    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=UserResponse.from_domain(user),
    )


@router.delete("/profile", response_model=MessageResponse)
def delete_profile(
    current_user: User = Depends(get_current_user_required),
    repo: UserRepository = Depends(get_user_repo),
):
    """Delete the current user's account. Irreversible."""
    try:
        account_service.delete_account(repo, current_user.id)
    except StoreUnavailableError:
        logger.exception("Delete account error", extra={"userId": current_user.id})
        raise HTTPException(status_code=500, detail="Failed to delete account")

    return MessageResponse(message="Account deleted successfully")

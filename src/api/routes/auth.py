"""Authentication routes (register, login)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.config import Settings, get_settings
from api.dependencies import get_token_service, get_user_repo
from api.models import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from domain.model.errors import (
    DuplicateError,
    InvalidCredentialsError,
    StoreUnavailableError,
    ValidationError,
)
from port.user_repository import UserRepository
from services import account_service
from services.token_service import TokenService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    """Register a new user.

    Raises:
        HTTPException: 400 if a field is missing or the email is taken,
            500 if the record store fails
    """
    try:
        result = account_service.register(
            repo,
            tokens,
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
            phone=str(request.phone) if request.phone is not None else None,
            bcrypt_rounds=settings.bcrypt_rounds,
        )
    except (ValidationError, DuplicateError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except StoreUnavailableError:
        logger.exception("Registration error")
        raise HTTPException(status_code=500, detail="Failed to create user")

    return AuthResponse(
        message="User created successfully",
        user=UserResponse.from_domain(result.user),
        token=result.token,
    )


@router.post("/login", response_model=AuthResponse)
def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
):
    """Login user and return JWT token.

    Raises:
        HTTPException: 400 if a field is missing, 401 if credentials are invalid
    """
    try:
        result = account_service.authenticate(
            repo, tokens, email=request.email, password=request.password,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except StoreUnavailableError:
        logger.exception("Login error")
        raise HTTPException(status_code=500, detail="Login failed")

    return AuthResponse(
        message="Login successful",
        user=UserResponse.from_domain(result.user),
        token=result.token,
    )

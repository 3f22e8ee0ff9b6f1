"""Account service: registration, login and profile lifecycle.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from dataclasses import dataclass

from domain.model.errors import (
    DuplicateError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from domain.model.user import ProfileUpdate, User, normalize_phone
from port.user_repository import UserRepository
from services.password import DEFAULT_BCRYPT_ROUNDS, hash_password, verify_password
from services.token_service import TokenService

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


@dataclass(frozen=True)
class AuthResult:
    """Authenticated user plus a freshly issued token."""
    user: User
    token: str


def register(
    repo: UserRepository,
    tokens: TokenService,
    email: str | None,
    password: str | None,
    first_name: str | None,
    last_name: str | None,
    phone: str | None = None,
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> AuthResult:
    """Register a new user and log them in.

    Raises:
        ValidationError: a required field is missing
        DuplicateError: email already registered (exact match)
        StoreUnavailableError: record store failure
    """
    if not email or not password or not first_name or not last_name:
        raise ValidationError("Email, password, firstName and lastName are required")

    if repo.get_by_email(email):
        raise DuplicateError("User already exists with this email")

    user = repo.create(
        email=email,
        password_hash=hash_password(password, rounds=bcrypt_rounds),
        first_name=first_name,
        last_name=last_name,
        phone=normalize_phone(phone),
    )
    logger.info("User registered", extra={"userId": user.id})
    return AuthResult(user=user, token=tokens.issue(user.id, user.email))


def authenticate(
    repo: UserRepository,
    tokens: TokenService,
    email: str | None,
    password: str | None,
) -> AuthResult:
    """Check email/password and issue a token.

    Unknown email and wrong password raise the same error with the same
    message.

    Raises:
        ValidationError: email or password missing
        InvalidCredentialsError: credentials do not match a user
    """
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = repo.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        raise InvalidCredentialsError(INVALID_CREDENTIALS_MESSAGE)

    logger.info("User logged in", extra={"userId": user.id})
    return AuthResult(user=user, token=tokens.issue(user.id, user.email))


def get_profile(repo: UserRepository, user_id: str) -> User:
    """Fresh read of the user record."""
    user = repo.get_by_id(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def update_profile(repo: UserRepository, user: User, changes: ProfileUpdate) -> User:
    """Apply a partial profile update on top of the current record.

    Absent (None) or empty names keep the previous value. A blank phone
    clears the stored phone; a phone that does not parse as a number is
    ignored and the previous value kept.
    """
    phone = user.phone
    if changes.phone is not None:
        if not changes.phone.strip():
            phone = None
        else:
            parsed = normalize_phone(changes.phone)
            if parsed is None:
                logger.info("Ignoring unparseable phone", extra={"userId": user.id})
            else:
                phone = parsed

    updated = repo.update(
        user.id,
        first_name=changes.first_name or user.first_name,
        last_name=changes.last_name or user.last_name,
        phone=phone,
    )
    if not updated:
        raise NotFoundError("User not found")

    logger.info("Profile updated", extra={"userId": user.id})
    return updated


def delete_account(repo: UserRepository, user_id: str) -> None:
    """Delete the user record.

    The user's likes are left in place; reads never join likes back to
    users, so orphans are harmless.
    """
    if not repo.delete(user_id):
        logger.warning("Account already gone", extra={"userId": user_id})
        return
    logger.info("Account deleted", extra={"userId": user_id})

"""JWT issuing and verification."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from domain.model.errors import InvalidTokenError, TokenExpiredError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_LIFETIME = timedelta(hours=24)


@dataclass(frozen=True)
class TokenClaims:
    """Identity carried by a verified token."""
    user_id: str
    email: str


class TokenService:
    """Signs and verifies time-limited identity tokens.

    The signing secret is injected; nothing here reads the environment.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = JWT_ALGORITHM,
        lifetime: timedelta = JWT_LIFETIME,
    ):
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, user_id: str, email: str) -> str:
        """Create a signed token for user_id/email expiring after `lifetime`."""
        now = datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "email": email,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Verify signature and expiry, return the embedded identity.

        Raises:
            TokenExpiredError: signature valid but token expired
            InvalidTokenError: malformed token, bad signature or missing claims
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token expired") from e
        except JWTError as e:
            logger.debug("JWT verification failed", extra={"error": str(e)})
            raise InvalidTokenError("Invalid token") from e

        user_id = payload.get("userId")
        email = payload.get("email")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("Invalid token")
        return TokenClaims(user_id=user_id, email=email or "")

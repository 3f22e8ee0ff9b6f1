"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone

from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(
        self,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        phone: int | float | None = None,
    ) -> User:
        user_id = 'rec' + uuid.uuid4().hex[:14]
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            email=email,
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
        )
        self.store[user_id] = user
        return user

    def update(
        self,
        user_id: str,
        first_name: str,
        last_name: str,
        phone: int | float | None,
    ) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        user.first_name = first_name
        user.last_name = last_name
        user.phone = phone
        user.updated_at = datetime.now(timezone.utc)
        return user

    def delete(self, user_id: str) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Store failures raise StoreUnavailableError; a missing record is None.
    """
    def create(
        self,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        phone: int | float | None = None,
    ) -> User:
        """Create a new user and return it."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by exact (case-sensitive) email. Return User or None."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def update(
        self,
        user_id: str,
        first_name: str,
        last_name: str,
        phone: int | float | None,
    ) -> User | None:
        """Overwrite profile fields. Return updated User or None if not found."""
        ...

    def delete(self, user_id: str) -> bool:
        """Delete a user. Return True if a record was removed."""
        ...

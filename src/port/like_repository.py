from typing import Protocol

from domain.model.like import Like


class LikeRepository(Protocol):
    """Protocol for like data access.

    project_id is the project's external id as text.
    """

    def find(self, user_id: str, project_id: str) -> list[Like]:
        """All likes matching the (user, project) pair, in store order."""
        ...

    def create(self, user_id: str, project_id: str, created_at: str) -> Like:
        """Insert a like record and return it.

        Raises AlreadyLikedError if the store enforces uniqueness and the
        pair already exists.
        """
        ...

    def delete(self, like_id: str) -> bool:
        """Delete a like by ID. Return True if a record was removed."""
        ...

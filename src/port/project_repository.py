from typing import Protocol

from domain.model.project import Project


class ProjectRepository(Protocol):
    """Protocol for read-only project data access."""

    def list_all(self) -> list[Project]:
        """Return every project."""
        ...

    def get_by_id(self, project_id: str) -> Project | None:
        """Find a project by store ID. Return Project or None if not found."""
        ...

    def search(self, keywords: str) -> list[Project]:
        """Projects whose title or description contains keywords (case-insensitive)."""
        ...

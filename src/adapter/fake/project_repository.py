"""In-memory implementation of ProjectRepository for testing."""

from domain.model.project import Project


class FakeProjectRepository:
    def __init__(self, projects: list[Project] | None = None):
        self.store: dict[str, Project] = {p.id: p for p in projects or []}

    def add(self, project: Project) -> Project:
        """Seed a project (test helper, projects are read-only in the API)."""
        self.store[project.id] = project
        return project

    def list_all(self) -> list[Project]:
        return [_copy(p) for p in self.store.values()]

    def get_by_id(self, project_id: str) -> Project | None:
        project = self.store.get(project_id)
        return _copy(project) if project else None

    def search(self, keywords: str) -> list[Project]:
        needle = keywords.lower()
        return [
            _copy(p) for p in self.store.values()
            if needle in p.title.lower() or needle in (p.description or '').lower()
        ]


def _copy(project: Project) -> Project:
    # Callers annotate is_liked per request; never mutate the seeded record
    return Project(**{**project.__dict__, 'is_liked': None})

from dataclasses import dataclass


@dataclass
class Project:
    """Domain model representing a portfolio project (read-only)."""
    id: str
    external_id: int | None
    title: str
    description: str = ''
    created_at: str | None = None
    likes: int = 0
    picture: str | None = None
    is_liked: bool | None = None

    @property
    def like_key(self) -> str:
        """Identifier likes are linked by: the external id as text."""
        return str(self.external_id)

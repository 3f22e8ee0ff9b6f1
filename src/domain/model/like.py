from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass
class Like:
    """Join entity linking one user to one project's external id."""
    id: str
    user_id: str
    project_id: str
    created_at: str

    @staticmethod
    def today() -> str:
        """Creation date at day granularity (YYYY-MM-DD, UTC)."""
        return datetime.now(timezone.utc).date().isoformat()

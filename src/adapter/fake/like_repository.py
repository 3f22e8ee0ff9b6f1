"""In-memory implementation of LikeRepository for testing."""

import uuid

from domain.model.like import Like


class FakeLikeRepository:
    def __init__(self):
        self.store: dict[str, Like] = {}

    def find(self, user_id: str, project_id: str) -> list[Like]:
        return [
            like for like in self.store.values()
            if like.user_id == user_id and like.project_id == project_id
        ]

    def create(self, user_id: str, project_id: str, created_at: str) -> Like:
        like_id = 'rec' + uuid.uuid4().hex[:14]
        like = Like(id=like_id, user_id=user_id, project_id=project_id, created_at=created_at)
        self.store[like_id] = like
        return like

    def delete(self, like_id: str) -> bool:
        return self.store.pop(like_id, None) is not None

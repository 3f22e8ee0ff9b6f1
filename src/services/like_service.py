"""Like toggle service: at most one like per (user, project).

The existence check and the write are two separate store calls. KeyedLocks
serializes them per (user, project) inside one process; stores that can
enforce uniqueness themselves (MongoDB) also do so.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from domain.model.errors import AlreadyLikedError, LikeNotFoundError
from domain.model.like import Like
from domain.model.project import Project
from port.like_repository import LikeRepository

logger = logging.getLogger(__name__)


class KeyedLocks:
    """Mutual exclusion map keyed by (user_id, project_id).

    Locks are reference counted and dropped once nobody holds or waits on
    them, so the map does not grow with every pair ever liked.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[tuple[str, str], tuple[threading.Lock, int]] = {}

    @contextmanager
    def hold(self, user_id: str, project_id: str) -> Iterator[None]:
        key = (user_id, project_id)
        with self._guard:
            lock, users = self._locks.get(key, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._locks[key] = (lock, users + 1)

        lock.acquire()
        try:
            yield
        finally:
            lock.release()
            with self._guard:
                _, users = self._locks[key]
                if users <= 1:
                    del self._locks[key]
                else:
                    self._locks[key] = (lock, users - 1)

    def __len__(self) -> int:
        return len(self._locks)


@dataclass(frozen=True)
class LikeResult:
    success: bool
    like_id: str


@contextmanager
def _maybe_hold(locks: KeyedLocks | None, user_id: str, project_id: str) -> Iterator[None]:
    if locks is None:
        yield
        return
    with locks.hold(user_id, project_id):
        yield


def add_like(
    repo: LikeRepository,
    user_id: str,
    project_id: str,
    locks: KeyedLocks | None = None,
) -> LikeResult:
    """Like a project.

    Raises:
        AlreadyLikedError: the pair is already liked
    """
    with _maybe_hold(locks, user_id, project_id):
        if repo.find(user_id, project_id):
            raise AlreadyLikedError(user_id, project_id)
        like: Like = repo.create(user_id, project_id, created_at=Like.today())

    logger.info("Project liked", extra={"userId": user_id, "projectId": project_id, "likeId": like.id})
    return LikeResult(success=True, like_id=like.id)


def remove_like(
    repo: LikeRepository,
    user_id: str,
    project_id: str,
    locks: KeyedLocks | None = None,
) -> None:
    """Unlike a project, deleting the first matching like.

    Raises:
        LikeNotFoundError: the pair is not liked
    """
    with _maybe_hold(locks, user_id, project_id):
        existing = repo.find(user_id, project_id)
        if not existing:
            raise LikeNotFoundError(user_id, project_id)
        repo.delete(existing[0].id)

    logger.info("Like removed", extra={"userId": user_id, "projectId": project_id})


def has_liked(repo: LikeRepository, user_id: str | None, project_id: str) -> bool:
    """Whether user_id liked the project. Anonymous users never have."""
    if not user_id:
        return False
    return bool(repo.find(user_id, project_id))


def annotate_liked(
    repo: LikeRepository,
    user_id: str | None,
    projects: list[Project],
) -> list[Project]:
    """Set is_liked on each project for an authenticated user."""
    if not user_id:
        return projects
    for project in projects:
        project.is_liked = has_liked(repo, user_id, project.like_key)
    return projects

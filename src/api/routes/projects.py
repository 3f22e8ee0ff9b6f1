"""Project routes: listing, lookup, search and likes.

Endpoints:
- GET /projects: All projects (isLiked set for logged-in callers)
- GET /projects/{id}: One project by store id
- GET /projects/search/{keywords}: Title/description search
- POST /projects/{project_id}/like: Like a project (by external id)
- DELETE /projects/{project_id}/like: Remove a like
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_like_locks, get_like_repo, get_project_repo
from api.models import LikeResponse, MessageResponse, ProjectResponse
from api.security import get_current_user, get_current_user_required
from domain.model.errors import AlreadyLikedError, LikeNotFoundError, StoreUnavailableError
from domain.model.user import User
from port.like_repository import LikeRepository
from port.project_repository import ProjectRepository
from services import like_service
from services.like_service import KeyedLocks

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


def _user_id(user: Optional[User]) -> Optional[str]:
    return user.id if user else None


@router.get(
    "",
    response_model=list[ProjectResponse],
    response_model_exclude_unset=True,
)
def list_projects(
    current_user: Optional[User] = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repo),
    likes: LikeRepository = Depends(get_like_repo),
):
    """List all projects."""
    try:
        found = like_service.annotate_liked(likes, _user_id(current_user), projects.list_all())
    except StoreUnavailableError:
        logger.exception("Error fetching projects")
        raise HTTPException(status_code=500, detail="Failed to fetch projects")

    return [ProjectResponse.from_domain(p) for p in found]


@router.get(
    "/search/{keywords}",
    response_model=list[ProjectResponse],
    response_model_exclude_unset=True,
)
def search_projects(
    keywords: str,
    current_user: Optional[User] = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repo),
    likes: LikeRepository = Depends(get_like_repo),
):
    """Search projects whose title or description contains keywords."""
    try:
        found = like_service.annotate_liked(likes, _user_id(current_user), projects.search(keywords))
    except StoreUnavailableError:
        logger.exception("Error searching projects", extra={"keywords": keywords})
        raise HTTPException(status_code=500, detail="Failed to search projects")

    logger.info("Projects searched", extra={"keywords": keywords, "count": len(found)})
    return [ProjectResponse.from_domain(p) for p in found]


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    response_model_exclude_unset=True,
)
def get_project(
    project_id: str,
    current_user: Optional[User] = Depends(get_current_user),
    projects: ProjectRepository = Depends(get_project_repo),
    likes: LikeRepository = Depends(get_like_repo),
):
    """Get one project by its store id. Any lookup failure answers 404."""
    try:
        project = projects.get_by_id(project_id)
        if project:
            like_service.annotate_liked(likes, _user_id(current_user), [project])
    except StoreUnavailableError:
        logger.exception("Error fetching project", extra={"projectId": project_id})
        project = None

    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    return ProjectResponse.from_domain(project)


@router.post("/{project_id}/like", response_model=LikeResponse)
def like_project(
    project_id: str,
    current_user: User = Depends(get_current_user_required),
    likes: LikeRepository = Depends(get_like_repo),
    locks: KeyedLocks = Depends(get_like_locks),
):
    """Like a project, identified by its external id."""
    try:
        result = like_service.add_like(likes, current_user.id, project_id, locks=locks)
    except AlreadyLikedError:
        raise HTTPException(status_code=400, detail="You have already liked this project")
    except StoreUnavailableError:
        logger.exception("Like error", extra={"userId": current_user.id, "projectId": project_id})
        raise HTTPException(status_code=500, detail="Failed to like project")

    return LikeResponse(
        message="Project liked successfully",
        success=result.success,
        like_id=result.like_id,
    )


@router.delete("/{project_id}/like", response_model=MessageResponse)
def unlike_project(
    project_id: str,
    current_user: User = Depends(get_current_user_required),
    likes: LikeRepository = Depends(get_like_repo),
    locks: KeyedLocks = Depends(get_like_locks),
):
    """Remove the current user's like from a project."""
    try:
        like_service.remove_like(likes, current_user.id, project_id, locks=locks)
    except LikeNotFoundError:
        raise HTTPException(status_code=404, detail="Like not found")
    except StoreUnavailableError:
        logger.exception("Unlike error", extra={"userId": current_user.id, "projectId": project_id})
        raise HTTPException(status_code=500, detail="Failed to remove like")

    return MessageResponse(message="Like removed successfully")

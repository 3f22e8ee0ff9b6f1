"""Pydantic models for API request/response.

JSON bodies use camelCase keys; Python attributes stay snake_case.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.model.project import Project
from domain.model.user import User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── requests ─────────────────────────────────────────────────
# Required fields are Optional here so a missing field becomes a
# domain ValidationError (400) rather than a schema error (422).


class RegisterRequest(CamelModel):
    """Request model for user registration."""
    email: Optional[str] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[Union[str, int, float]] = None


class LoginRequest(CamelModel):
    """Request model for user login."""
    email: Optional[str] = None
    password: Optional[str] = None


class UpdateProfileRequest(CamelModel):
    """Partial profile update; omitted fields keep their value."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[Union[str, int, float]] = None


# ── responses ────────────────────────────────────────────────


class UserResponse(CamelModel):
    """Public view of a user (never includes the password hash)."""
    id: str
    email: str
    first_name: str
    last_name: str
    phone: Optional[Union[int, float]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(**user.to_public())


class AuthResponse(CamelModel):
    """Response model for register and login."""
    message: str
    user: UserResponse
    token: str


class ProfileResponse(CamelModel):
    user: UserResponse


class ProfileUpdateResponse(CamelModel):
    message: str
    user: UserResponse


class MessageResponse(CamelModel):
    message: str


class ProjectResponse(CamelModel):
    """Response model for project. is_liked is only set for logged-in callers."""
    id: str
    external_id: Optional[int] = Field(None, description="Human-facing numeric project id, used for likes")
    title: str
    description: str = ''
    created_at: Optional[str] = None
    likes: int = 0
    picture: Optional[str] = None
    is_liked: Optional[bool] = None

    @classmethod
    def from_domain(cls, project: Project) -> "ProjectResponse":
        fields = dict(
            id=project.id,
            external_id=project.external_id,
            title=project.title,
            description=project.description or '',
            created_at=project.created_at,
            likes=project.likes,
            picture=project.picture,
        )
        if project.is_liked is not None:
            fields['is_liked'] = project.is_liked
        return cls(**fields)


class LikeResponse(CamelModel):
    message: str
    success: bool
    like_id: str


class HealthResponse(CamelModel):
    message: str
    timestamp: str

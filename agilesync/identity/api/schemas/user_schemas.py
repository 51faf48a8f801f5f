"""
User & Session API Schemas
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agilesync.identity.application.dto.user_dto import UserProfile
from agilesync.identity.domain.entities.user import ThemePreferences, User
from agilesync.identity.domain.value_objects.email import Email


def check_email(value: str) -> str:
    if not Email.is_valid(value):
        raise ValueError("A valid email address is required.")
    return value


class RegisterRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    email: str = Field(..., min_length=1, max_length=256)
    display_name: str = Field(..., min_length=2, max_length=100)
    password: str = Field(..., min_length=6, max_length=256)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)


class LoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., min_length=1, max_length=256)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)


class AdminLoginRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)


class UpdateThemeRequest(BaseModel):
    """Unknown platforms are rejected by the service; unknown themes are stored as dark."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    platform: str = Field(..., min_length=1, description="web | pwa")
    theme: str = Field(..., min_length=1, description="dark | light")


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: str
    role: str

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls(id=user.id, email=user.email, display_name=user.display_name, role=user.role.value)

    @classmethod
    def from_profile(cls, profile: UserProfile) -> UserResponse:
        return cls.model_validate(profile)


class LoginResponse(UserResponse):
    token: str

    @classmethod
    def for_profile(cls, token: str, profile: UserProfile) -> LoginResponse:
        return cls(
            token=token,
            id=profile.id,
            email=profile.email,
            display_name=profile.display_name,
            role=profile.role,
        )


class AdminLoginResponse(BaseModel):
    token: str


class ThemePreferencesResponse(BaseModel):
    web: str
    pwa: str

    @classmethod
    def from_preferences(cls, prefs: ThemePreferences) -> ThemePreferencesResponse:
        return cls(web=prefs.web.value, pwa=prefs.pwa.value)

"""
Organization API Schemas
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from agilesync.identity.application.dto.organization_dto import OrganizationMember
from agilesync.identity.domain.entities.organization import Organization
from agilesync.identity.api.schemas.user_schemas import check_email


class CreateOrganizationRequest(BaseModel):
    """Create organization request schema. The slug is normalized server-side."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=200, description="Organization name")
    slug: str = Field(..., min_length=1, max_length=100, description="URL-safe slug")
    description: str = Field(default="", max_length=500)


class UpdateOrganizationRequest(BaseModel):
    """Update organization request schema; the slug is not updatable"""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=200)
    description: Optional[str] = Field(default="", max_length=500)
    is_active: bool = Field(default=True)


class AddTenantAdminRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    email: str = Field(..., min_length=1, max_length=256)
    display_name: str = Field(..., min_length=2, max_length=100)
    password: str = Field(..., min_length=6, max_length=256)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v)


class OrganizationResponse(BaseModel):
    """Organization response schema"""
    id: str = Field(..., description="Organization id")
    name: str = Field(..., description="Organization name")
    slug: str = Field(..., description="URL-safe slug")
    description: str
    is_active: bool = Field(..., description="Active status")
    created_at: datetime = Field(..., description="Creation timestamp")

    @classmethod
    def from_entity(cls, org: Organization) -> OrganizationResponse:
        return cls(
            id=org.id,
            name=org.name,
            slug=org.slug,
            description=org.description,
            is_active=org.is_active,
            created_at=org.created_at,
        )


class TenantAdminResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    display_name: str
    role: str
    joined_at: datetime

    @classmethod
    def from_member(cls, member: OrganizationMember) -> TenantAdminResponse:
        return cls.model_validate(member)

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from agilesync.identity.domain.entities.user import User


@dataclass(frozen=True)
class OrganizationMember:
    """A user seen through one organization: identity plus that organization's role."""

    id: str
    email: str
    display_name: str
    role: str
    joined_at: datetime

    @classmethod
    def from_user(cls, user: User, organization_id: str) -> OrganizationMember:
        membership = user.membership_for(organization_id)
        if membership is None:
            raise ValueError(f"{user!r} is not a member of organization {organization_id}")
        return cls(
            id=user.id,
            email=user.email,
            display_name=user.display_name,
            role=membership.role.value,
            joined_at=membership.joined_at,
        )

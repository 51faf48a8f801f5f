from agilesync.identity.application.dto.organization_dto import OrganizationMember
from agilesync.identity.application.dto.user_dto import UserProfile

__all__ = ["OrganizationMember", "UserProfile"]

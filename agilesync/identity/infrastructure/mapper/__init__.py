from agilesync.identity.infrastructure.mapper.organization_mapper import OrganizationMapper
from agilesync.identity.infrastructure.mapper.user_mapper import UserMapper

__all__ = ["OrganizationMapper", "UserMapper"]

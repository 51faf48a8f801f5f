"""Global and per-organization roles."""

from enum import StrEnum


class UserRole(StrEnum):
    """Global role carried by every user."""

    ADMIN = "Admin"
    MEMBER = "Member"
    VIEWER = "Viewer"


class OrgRole(StrEnum):
    """Role held inside one organization."""

    OWNER = "Owner"
    ADMIN = "Admin"
    MEMBER = "Member"
    VIEWER = "Viewer"

    def can_manage_members(self) -> bool:
        match self:
            case OrgRole.OWNER | OrgRole.ADMIN:
                return True
            case OrgRole.MEMBER | OrgRole.VIEWER:
                return False

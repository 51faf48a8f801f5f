from agilesync.identity.domain.entities.organization import Organization
from agilesync.identity.domain.entities.user import Membership, ThemePreferences, User

__all__ = ["Membership", "Organization", "ThemePreferences", "User"]

from agilesync.identity.domain.value_objects.email import Email, normalize_email
from agilesync.identity.domain.value_objects.roles import OrgRole, UserRole
from agilesync.identity.domain.value_objects.slug import Slug, normalize_slug
from agilesync.identity.domain.value_objects.theme import Platform, Theme

__all__ = [
    "Email",
    "OrgRole",
    "Platform",
    "Slug",
    "Theme",
    "UserRole",
    "normalize_email",
    "normalize_slug",
]

"""
User Entity
Account data, global role, organization memberships and theme preferences
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

from agilesync.shared.domain.base_entity import BaseEntity, as_utc, utcnow
from agilesync.shared.exceptions import ConflictError, NotFoundError
from agilesync.identity.domain.value_objects.email import normalize_email
from agilesync.identity.domain.value_objects.roles import OrgRole, UserRole
from agilesync.identity.domain.value_objects.theme import Platform, Theme


@dataclass
class Membership:
    """Binding of a user to one organization with a per-org role."""

    organization_id: str
    role: OrgRole = OrgRole.MEMBER
    joined_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        self.role = OrgRole(self.role)
        self.joined_at = as_utc(self.joined_at)


class ThemePreferences:
    """Per-platform theme. Every write path coerces to dark/light."""

    __slots__ = ("_web", "_pwa")

    def __init__(self, web: object = Theme.DARK, pwa: object = Theme.DARK) -> None:
        self._web = Theme.coerce(web)
        self._pwa = Theme.coerce(pwa)

    @property
    def web(self) -> Theme:
        return self._web

    @web.setter
    def web(self, value: object) -> None:
        self._web = Theme.coerce(value)

    @property
    def pwa(self) -> Theme:
        return self._pwa

    @pwa.setter
    def pwa(self, value: object) -> None:
        self._pwa = Theme.coerce(value)

    def get(self, platform: Platform) -> Theme:
        match platform:
            case Platform.WEB:
                return self._web
            case Platform.PWA:
                return self._pwa

    def set(self, platform: Platform, value: object) -> Theme:
        match platform:
            case Platform.WEB:
                self.web = value
                return self._web
            case Platform.PWA:
                self.pwa = value
                return self._pwa

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ThemePreferences):
            return False
        return (self._web, self._pwa) == (other._web, other._pwa)

    def __repr__(self) -> str:
        return f"ThemePreferences(web={self._web.value!r}, pwa={self._pwa.value!r})"


class User(BaseEntity):
    """
    User account.

    Invariants:
    - email is stored lower-cased and trimmed, whichever path sets it
    - at most one membership per organization
    - password_hash is opaque; it is only ever checked through PasswordService.verify
    """

    def __init__(
        self,
        email: str,
        display_name: str,
        password_hash: str,
        role: UserRole = UserRole.MEMBER,
        is_active: bool = True,
        memberships: Optional[Iterable[Membership]] = None,
        theme_preferences: Optional[ThemePreferences] = None,
        id: Optional[str] = None,
        tenant_id: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        version: int = 1,
    ) -> None:
        super().__init__(
            id=id,
            tenant_id=tenant_id,
            created_at=created_at,
            updated_at=updated_at,
            version=version,
        )
        self._email = normalize_email(email)
        self.display_name = display_name
        self.password_hash = password_hash
        self.role = UserRole(role)
        self.is_active = is_active
        self._memberships: List[Membership] = []
        for membership in memberships or ():
            self._append(membership)
        self.theme_preferences = theme_preferences or ThemePreferences()

    # ---- email -------------------------------------------------------------
    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, value: str) -> None:
        self._email = normalize_email(value)

    # ---- memberships -------------------------------------------------------
    @property
    def memberships(self) -> List[Membership]:
        """Copy of the membership list; mutate through add/remove."""
        return list(self._memberships)

    def membership_for(self, organization_id: str) -> Optional[Membership]:
        for membership in self._memberships:
            if membership.organization_id == organization_id:
                return membership
        return None

    def org_role(self, organization_id: str) -> Optional[OrgRole]:
        """Per-org role, or None when the user is not a member at all."""
        membership = self.membership_for(organization_id)
        return membership.role if membership else None

    def is_member_of(self, organization_id: str) -> bool:
        return self.membership_for(organization_id) is not None

    def add_membership(
        self,
        organization_id: str,
        role: OrgRole = OrgRole.MEMBER,
        joined_at: Optional[datetime] = None,
    ) -> Membership:
        membership = Membership(organization_id, role, joined_at or utcnow())
        self._append(membership)
        return membership

    def remove_membership(self, organization_id: str) -> Membership:
        membership = self.membership_for(organization_id)
        if membership is None:
            raise NotFoundError(
                "User is not a member of this organization",
                code="membership_not_found",
                details={"user_id": self.id, "organization_id": organization_id},
            )
        self._memberships.remove(membership)
        return membership

    def backfill_tenant(self, organization_id: str) -> bool:
        """Set tenant_id only when it is still empty. Returns True if it was set."""
        if self.tenant_id:
            return False
        self.tenant_id = organization_id
        return True

    def _append(self, membership: Membership) -> None:
        if self.is_member_of(membership.organization_id):
            raise ConflictError(
                "User is already a member of this organization.",
                details={"user_id": self.id, "organization_id": membership.organization_id},
            )
        self._memberships.append(membership)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self._email!r})"

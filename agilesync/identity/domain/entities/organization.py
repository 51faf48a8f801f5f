"""
Organization Entity - Multi-tenant root
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from agilesync.shared.domain.base_entity import BaseEntity
from agilesync.identity.domain.value_objects.slug import normalize_slug


class Organization(BaseEntity):
    """
    Tenant organization.

    Attributes:
        name: Organization display name
        slug: Globally unique identifier, stored normalized; immutable after creation
        description: Free text, may be empty
        is_active: Soft-delete flag; deactivation never removes the record
    """

    def __init__(
        self,
        name: str,
        slug: str,
        description: str = "",
        is_active: bool = True,
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
        self.name = name
        self._slug = normalize_slug(slug)
        self.description = description or ""
        self.is_active = is_active

    @staticmethod
    def create(name: str, slug: str, description: str = "") -> Organization:
        """
        Factory for a brand-new organization.

        An organization is its own tenant root, so tenant_id is its own id.
        """
        org = Organization(name=name, slug=slug, description=description, is_active=True)
        org.tenant_id = org.id
        return org

    @property
    def slug(self) -> str:
        return self._slug

    def update(self, name: str, description: Optional[str], is_active: bool) -> None:
        self.name = name
        self.description = description or ""
        self.is_active = is_active

    def deactivate(self) -> None:
        """Soft delete. Calling it on an inactive organization is a no-op."""
        self.is_active = False

    def __repr__(self) -> str:
        return f"Organization(id={self.id}, slug={self._slug!r})"

"""
Organization Repository Implementation
"""
from __future__ import annotations

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agilesync.shared.database.base_repository import SqlAlchemyRepository
from agilesync.identity.domain.entities.organization import Organization
from agilesync.identity.domain.value_objects.slug import normalize_slug
from agilesync.identity.infrastructure.mapper.organization_mapper import OrganizationMapper
from agilesync.identity.infrastructure.persistence.models.organization_model import (
    OrganizationModel,
)


class OrganizationRepository(SqlAlchemyRepository[OrganizationModel, Organization]):
    """
    Organization repository implementation.

    Handles persistence for the Organization tenant root.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, OrganizationModel, OrganizationMapper())

    async def get_by_slug(self, slug: str) -> Optional[Organization]:
        """
        Get organization by slug.

        Args:
            slug: Raw or normalized slug; normalized before the lookup

        Returns:
            Organization if found, None otherwise
        """
        return await self.first_by(slug=normalize_slug(slug))

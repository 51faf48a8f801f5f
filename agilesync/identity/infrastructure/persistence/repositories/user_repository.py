"""
User Repository Implementation
"""
from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from agilesync.shared.database.base_repository import SqlAlchemyRepository
from agilesync.identity.domain.entities.user import User
from agilesync.identity.domain.value_objects.email import normalize_email
from agilesync.identity.infrastructure.mapper.user_mapper import UserMapper
from agilesync.identity.infrastructure.persistence.models.user_model import UserModel


class UserRepository(SqlAlchemyRepository[UserModel, User]):
    """Persistence for User entities."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        super().__init__(session_factory, UserModel, UserMapper())

    async def get_by_email(self, email: str) -> Optional[User]:
        """Lookup by email; the input is normalized the same way writes are."""
        return await self.first_by(email=normalize_email(email))

    async def list_members_of(self, organization_id: str) -> List[User]:
        """Users holding a membership in the organization (memberships are embedded, so scanned in memory)."""
        return await self.find(lambda user: user.is_member_of(organization_id))

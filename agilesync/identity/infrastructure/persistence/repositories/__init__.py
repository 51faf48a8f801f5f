from agilesync.identity.infrastructure.persistence.repositories.organization_repository import (
    OrganizationRepository,
)
from agilesync.identity.infrastructure.persistence.repositories.user_repository import UserRepository

__all__ = ["OrganizationRepository", "UserRepository"]

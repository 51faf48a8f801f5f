# agilesync/dependencies.py
"""
Application container: everything with process lifetime, built once per app.
"""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from agilesync.config import Settings
from agilesync.shared.database.engine import (
    close_database_engine,
    create_database_engine,
    create_schema,
    create_session_factory,
)
from agilesync.identity.application.services.auth_service import AuthService
from agilesync.identity.application.services.authorization_gate import AuthorizationGate
from agilesync.identity.application.services.session_service import SessionManager
from agilesync.identity.application.services.tenant_service import TenantAdminService
from agilesync.identity.application.services.user_service import UserService
from agilesync.identity.infrastructure.adapters.password_service import PasswordService
from agilesync.identity.infrastructure.persistence.repositories.organization_repository import (
    OrganizationRepository,
)
from agilesync.identity.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)


@dataclass
class AppContainer:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    users: UserRepository
    organizations: OrganizationRepository
    passwords: PasswordService
    sessions: SessionManager
    gate: AuthorizationGate
    auth_service: AuthService
    user_service: UserService
    tenant_service: TenantAdminService

    @classmethod
    def build(cls, settings: Settings, *, passwords: PasswordService | None = None) -> AppContainer:
        engine = create_database_engine(settings)
        session_factory = create_session_factory(engine)
        users = UserRepository(session_factory)
        organizations = OrganizationRepository(session_factory)
        passwords = passwords or PasswordService()
        sessions = SessionManager.from_settings(settings)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=session_factory,
            users=users,
            organizations=organizations,
            passwords=passwords,
            sessions=sessions,
            gate=AuthorizationGate(sessions),
            auth_service=AuthService(users=users, passwords=passwords, sessions=sessions, settings=settings),
            user_service=UserService(users=users, organizations=organizations, passwords=passwords),
            tenant_service=TenantAdminService(users=users, organizations=organizations, passwords=passwords),
        )

    async def startup(self) -> None:
        if self.settings.AUTO_CREATE_SCHEMA:
            await create_schema(self.engine)

    async def shutdown(self) -> None:
        await close_database_engine(self.engine)

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from agilesync.shared.exceptions import ConflictError, ForbiddenError, NotFoundError
from agilesync.shared.logging import get_logger, log_security_event
from agilesync.identity.application.dto.organization_dto import OrganizationMember
from agilesync.identity.application.services.authorization_gate import Principal
from agilesync.identity.domain.entities.user import ThemePreferences, User
from agilesync.identity.domain.value_objects.email import Email
from agilesync.identity.domain.value_objects.roles import UserRole
from agilesync.identity.domain.value_objects.theme import Platform
from agilesync.identity.infrastructure.adapters.password_service import PasswordService
from agilesync.identity.infrastructure.persistence.repositories.organization_repository import (
    OrganizationRepository,
)
from agilesync.identity.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

logger = get_logger(__name__)


@dataclass
class UserService:
    users: UserRepository
    organizations: OrganizationRepository
    passwords: PasswordService

    async def register(self, email: str, display_name: str, password: str) -> User:
        """Self-service signup: Member role, active, no tenant yet."""
        address = Email(email).value
        if await self.users.get_by_email(address) is not None:
            raise ConflictError("Email already registered.", details={"email": address})

        user = User(
            email=address,
            display_name=display_name.strip(),
            password_hash=self.passwords.hash(password),
            role=UserRole.MEMBER,
        )
        await self.users.create(user)
        log_security_event("user_registered", user_id=user.id)
        return user

    async def list_users(self) -> List[User]:
        return await self.users.get_all()

    async def get_user(self, user_id: str) -> User:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", code="user_not_found", details={"user_id": user_id})
        return user

    async def get_theme(self, principal: Principal, user_id: str) -> ThemePreferences:
        self._ensure_self_or_superadmin(principal, user_id, action="read")
        return (await self.get_user(user_id)).theme_preferences

    async def update_theme(
        self, principal: Principal, user_id: str, platform: str, theme: str
    ) -> ThemePreferences:
        """
        Set one platform's theme on the caller's own account (or any account
        for the superadmin). An unknown platform is a ValidationError;
        an unknown theme value is stored as dark.
        """
        self._ensure_self_or_superadmin(principal, user_id, action="update")
        target = Platform.parse(platform)
        user = await self.get_user(user_id)
        stored = user.theme_preferences.set(target, theme)
        await self.users.update(user)
        logger.info("Theme updated", user_id=user_id, platform=target.value, theme=stored.value)
        return user.theme_preferences

    async def list_organization_members(
        self, principal: Principal, organization_id: str
    ) -> List[OrganizationMember]:
        """
        Members of an organization with their per-org roles.

        The superadmin may list any organization. A user needs an Owner or
        Admin membership there; non-members and low-privilege members are denied.
        """
        if not principal.is_superadmin:
            caller = await self.users.get_by_id(principal.subject)
            role = caller.org_role(organization_id) if caller else None
            if role is None or not role.can_manage_members():
                log_security_event(
                    "organization_members_listed",
                    user_id=principal.subject,
                    tenant_id=organization_id,
                    outcome="denied",
                    details={"org_role": role.value if role else None},
                )
                raise ForbiddenError(
                    "Not allowed to view members of this organization",
                    details={"organization_id": organization_id},
                )

        if await self.organizations.get_by_id(organization_id) is None:
            raise NotFoundError(
                "Organization not found",
                code="organization_not_found",
                details={"organization_id": organization_id},
            )

        members = await self.users.list_members_of(organization_id)
        return [OrganizationMember.from_user(user, organization_id) for user in members]


    @staticmethod
    def _ensure_self_or_superadmin(principal: Principal, user_id: str, *, action: str) -> None:
        if principal.is_superadmin or principal.subject == user_id:
            return
        log_security_event(
            f"theme_{action}",
            user_id=principal.subject,
            outcome="denied",
            details={"target_user_id": user_id},
        )
        raise ForbiddenError(
            "Not allowed to access another user's preferences",
            details={"user_id": user_id},
        )

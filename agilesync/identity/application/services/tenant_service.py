# agilesync/identity/application/services/tenant_service.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from agilesync.shared.exceptions import ConflictError, NotFoundError, StaleEntityError
from agilesync.shared.logging import get_logger, log_security_event
from agilesync.identity.application.dto.organization_dto import OrganizationMember
from agilesync.identity.domain.entities.organization import Organization
from agilesync.identity.domain.entities.user import User
from agilesync.identity.domain.value_objects.email import Email
from agilesync.identity.domain.value_objects.roles import OrgRole, UserRole
from agilesync.identity.domain.value_objects.slug import Slug, normalize_slug
from agilesync.identity.infrastructure.adapters.password_service import PasswordService
from agilesync.identity.infrastructure.persistence.repositories.organization_repository import (
    OrganizationRepository,
)
from agilesync.identity.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

logger = get_logger(__name__)

MEMBERSHIP_WRITE_ATTEMPTS = 3


@dataclass(frozen=True)
class TenantAdminResult:
    member: OrganizationMember
    created_user: bool


@dataclass
class TenantAdminService:
    """
    Organization lifecycle and tenant-admin membership transitions.

    Every step is a single repository call; a multi-step transition (find or
    create the user, then attach the membership) is not atomic across steps.
    """

    users: UserRepository
    organizations: OrganizationRepository
    passwords: PasswordService

    # ------------ Queries -----------------------------------------------------
    async def list_organizations(self) -> List[Organization]:
        return await self.organizations.get_all()

    async def get_organization(self, organization_id: str) -> Organization:
        org = await self.organizations.get_by_id(organization_id)
        if org is None:
            raise NotFoundError(
                "Organization not found",
                code="organization_not_found",
                details={"organization_id": organization_id},
            )
        return org

    async def get_organization_by_slug(self, slug: str) -> Organization:
        org = await self.organizations.get_by_slug(slug)
        if org is None:
            raise NotFoundError(
                "Organization not found",
                code="organization_not_found",
                details={"slug": normalize_slug(slug)},
            )
        return org

    async def list_tenant_admins(self, organization_id: str) -> List[OrganizationMember]:
        await self.get_organization(organization_id)
        members = await self.users.list_members_of(organization_id)
        return [OrganizationMember.from_user(user, organization_id) for user in members]

    # ------------ Organization lifecycle --------------------------------------
    async def create_organization(self, name: str, slug: str, description: Optional[str] = "") -> Organization:
        """
        Create a tenant root. Slugs are compared in normalized form, so
        "ACME Corp" and " acme-corp " collide. Retries surface ConflictError.
        """
        normalized = Slug.parse(slug).value
        if await self.organizations.get_by_slug(normalized) is not None:
            raise ConflictError(
                "An organization with this slug already exists.",
                details={"slug": normalized},
            )

        org = Organization.create(name=name.strip(), slug=normalized, description=description or "")
        await self.organizations.create(org)
        log_security_event("organization_created", tenant_id=org.id, details={"slug": org.slug})
        return org

    async def update_organization(
        self,
        organization_id: str,
        *,
        name: str,
        description: Optional[str],
        is_active: bool,
    ) -> Organization:
        org = await self.get_organization(organization_id)
        org.update(name=name.strip(), description=description, is_active=is_active)
        await self.organizations.update(org)
        log_security_event(
            "organization_updated",
            tenant_id=org.id,
            details={"is_active": org.is_active},
        )
        return org

    async def deactivate_organization(self, organization_id: str) -> Organization:
        """Soft delete; repeating it on an inactive organization still succeeds."""
        org = await self.get_organization(organization_id)
        org.deactivate()
        await self.organizations.update(org)
        log_security_event("organization_deactivated", tenant_id=org.id)
        return org

    # ------------ Tenant admins -----------------------------------------------
    async def add_tenant_admin(
        self,
        organization_id: str,
        *,
        email: str,
        display_name: str,
        password: str,
    ) -> TenantAdminResult:
        """
        Attach ``email`` as an Admin of the organization.

        - Unknown email: create the user (global Admin, tenant = this org, one Admin membership).
        - Known email: ConflictError if already a member, otherwise append an Admin
          membership and backfill tenant_id only if it was still empty.

        The existing-user and new-user paths both end in one write. A concurrent
        duplicate create is caught by the unique email index as ConflictError; a
        concurrent membership write on the same user is re-read and reapplied.
        """
        await self.get_organization(organization_id)
        address = Email(email).value

        user = await self.users.get_by_email(address)
        if user is not None:
            user = await self._attach_admin(user, organization_id)
            created = False
        else:
            user = User(
                email=address,
                display_name=display_name.strip(),
                password_hash=self.passwords.hash(password),
                role=UserRole.ADMIN,
                tenant_id=organization_id,
            )
            user.add_membership(organization_id, OrgRole.ADMIN)
            await self.users.create(user)
            created = True

        log_security_event(
            "tenant_admin_added",
            user_id=user.id,
            tenant_id=organization_id,
            details={"created_user": created},
        )
        return TenantAdminResult(OrganizationMember.from_user(user, organization_id), created)

    async def remove_tenant_admin(self, organization_id: str, user_id: str) -> None:
        """Drop exactly one membership; the user and other memberships stay."""
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", code="user_not_found", details={"user_id": user_id})

        user.remove_membership(organization_id)
        await self.users.update(user)
        log_security_event("tenant_admin_removed", user_id=user.id, tenant_id=organization_id)

    async def _attach_admin(self, user: User, organization_id: str) -> User:
        """Append an Admin membership, retrying on a lost optimistic-lock race."""
        attempt = 1
        while True:
            user.add_membership(organization_id, OrgRole.ADMIN)
            user.backfill_tenant(organization_id)
            try:
                return await self.users.update(user)
            except StaleEntityError:
                if attempt == MEMBERSHIP_WRITE_ATTEMPTS:
                    raise
                logger.info(
                    "Membership write lost a race; re-reading user",
                    user_id=user.id,
                    tenant_id=organization_id,
                    attempt=attempt,
                )
                fresh = await self.users.get_by_id(user.id)
                if fresh is None:
                    raise NotFoundError(
                        "User not found", code="user_not_found", details={"user_id": user.id}
                    )
                user = fresh
                attempt += 1

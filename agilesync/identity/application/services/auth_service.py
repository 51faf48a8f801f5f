"""
Authentication use-cases for both principal classes.
"""
from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import Tuple

from agilesync.config import Settings
from agilesync.shared.exceptions import MisconfiguredError, UnauthenticatedError
from agilesync.shared.logging import get_logger, log_security_event
from agilesync.identity.application.dto.user_dto import UserProfile
from agilesync.identity.application.services.authorization_gate import Principal
from agilesync.identity.application.services.session_service import (
    SUPERADMIN_PRINCIPAL,
    SessionManager,
)
from agilesync.identity.domain.entities.user import User
from agilesync.identity.infrastructure.adapters.password_service import PasswordService
from agilesync.identity.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

logger = get_logger(__name__)

SUPERADMIN_ROLE = "SuperAdmin"
INVALID_LOGIN = "Invalid email or password"


@dataclass
class AuthService:
    users: UserRepository
    passwords: PasswordService
    sessions: SessionManager
    settings: Settings

    # ------------ user sessions ----------------------------------------------
    async def login(self, email: str, password: str) -> Tuple[str, User]:
        """
        Verify credentials and open a user session.

        Unknown email, inactive account and wrong password all surface the same
        UnauthenticatedError so callers cannot tell which one failed.
        """
        user = await self.users.get_by_email(email)
        if user is None or not user.is_active or not self.passwords.verify(password, user.password_hash):
            log_security_event(
                "user_login",
                user_id=user.id if user else None,
                outcome="failure",
                details={"reason": _failure_reason(user)},
            )
            raise UnauthenticatedError(INVALID_LOGIN, code="invalid_credentials")

        if self.passwords.needs_rehash(user.password_hash):
            user.password_hash = self.passwords.hash(password)
            await self.users.update(user)
            logger.info("Password hash upgraded", user_id=user.id)

        token = self.sessions.issue_user_session(user.id)
        log_security_event("user_login", user_id=user.id, tenant_id=user.tenant_id)
        return token, user

    def logout(self, token: str) -> None:
        self.sessions.revoke_user_token(token)

    async def current_profile(self, principal: Principal) -> UserProfile:
        if principal.is_superadmin:
            return self.superadmin_profile()

        user = await self.users.get_by_id(principal.subject)
        if user is None or not user.is_active:
            raise UnauthenticatedError("Unauthorized")
        return UserProfile.from_user(user)

    def superadmin_profile(self) -> UserProfile:
        """Synthetic profile behind impersonation tokens."""
        return UserProfile(
            id=SUPERADMIN_PRINCIPAL,
            email=self.settings.SUPERADMIN_EMAIL,
            display_name=self.settings.SUPERADMIN_DISPLAY_NAME,
            role=SUPERADMIN_ROLE,
        )

    # ------------ superadmin sessions ----------------------------------------
    def admin_login(self, username: str, password: str) -> str:
        if not self.settings.superadmin_configured:
            logger.error(
                "Superadmin credentials are not configured",
                has_username=bool(self.settings.SUPERADMIN_USERNAME),
                has_password=bool(self.settings.SUPERADMIN_PASSWORD),
            )
            raise MisconfiguredError("Server misconfiguration")

        expected_username = self.settings.SUPERADMIN_USERNAME
        expected_password = self.settings.SUPERADMIN_PASSWORD

        username_ok = secrets.compare_digest(username.encode("utf-8"), expected_username.encode("utf-8"))
        password_ok = secrets.compare_digest(password.encode("utf-8"), expected_password.encode("utf-8"))
        if not (username_ok and password_ok):
            log_security_event("admin_login", outcome="failure")
            raise UnauthenticatedError("Invalid credentials", code="invalid_credentials")

        token = self.sessions.issue_admin_session()
        log_security_event("admin_login", user_id=SUPERADMIN_PRINCIPAL)
        return token

    def admin_logout(self, token: str) -> None:
        self.sessions.revoke_admin_token(token)

    def issue_app_token(self) -> Tuple[str, UserProfile]:
        """Impersonation token: a user-registry session for the synthetic superadmin."""
        return self.sessions.issue_impersonation_token(), self.superadmin_profile()


def _failure_reason(user: User | None) -> str:
    if user is None:
        return "unknown_email"
    if not user.is_active:
        return "inactive"
    return "bad_password"

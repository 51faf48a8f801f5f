"""
Session manager: owns the user and superadmin registries.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from agilesync.config import Settings
from agilesync.shared.logging import log_security_event
from agilesync.identity.infrastructure.sessions.registry import SessionRegistry

# Principal id registered in the user registry for superadmin "view as app" tokens.
SUPERADMIN_PRINCIPAL = "superadmin"


@dataclass
class SessionManager:
    """
    Two independent registries: one for end users, one for the superadmin.

    Impersonation tokens live in the user registry under SUPERADMIN_PRINCIPAL,
    so the user-facing surface cannot tell them apart from ordinary sessions.
    """

    user_sessions: SessionRegistry[str] = field(default_factory=lambda: SessionRegistry("user"))
    admin_sessions: SessionRegistry[str] = field(default_factory=lambda: SessionRegistry("admin"))

    @classmethod
    def from_settings(cls, settings: Settings) -> SessionManager:
        ttl = timedelta(hours=settings.SESSION_TTL_HOURS)
        return cls(
            user_sessions=SessionRegistry("user", ttl),
            admin_sessions=SessionRegistry("admin", ttl),
        )

    # ---- issue -------------------------------------------------------------
    def issue_user_session(self, user_id: str) -> str:
        token = self.user_sessions.issue(user_id)
        log_security_event("session_issued", user_id=user_id, details={"registry": "user"})
        return token

    def issue_admin_session(self) -> str:
        token = self.admin_sessions.issue(SUPERADMIN_PRINCIPAL)
        log_security_event("session_issued", user_id=SUPERADMIN_PRINCIPAL, details={"registry": "admin"})
        return token

    def issue_impersonation_token(self) -> str:
        token = self.user_sessions.issue(SUPERADMIN_PRINCIPAL)
        log_security_event("impersonation_token_issued", user_id=SUPERADMIN_PRINCIPAL)
        return token

    # ---- resolve -----------------------------------------------------------
    def resolve_user_token(self, token: str) -> Optional[str]:
        return self.user_sessions.resolve(token)

    def resolve_admin_token(self, token: str) -> bool:
        return self.admin_sessions.resolve(token) is not None

    # ---- revoke ------------------------------------------------------------
    def revoke_user_token(self, token: str) -> None:
        if self.user_sessions.revoke(token):
            log_security_event("session_revoked", details={"registry": "user"})

    def revoke_admin_token(self, token: str) -> None:
        if self.admin_sessions.revoke(token):
            log_security_event("session_revoked", user_id=SUPERADMIN_PRINCIPAL, details={"registry": "admin"})

    def purge_expired(self) -> int:
        """Sweep both registries; returns the number of sessions dropped."""
        return self.user_sessions.purge_expired() + self.admin_sessions.purge_expired()

"""
Authorization gate: bearer header -> resolved principal, or UnauthenticatedError.

Role checks are not done here; callers inspect the principal's roles themselves.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from agilesync.shared.exceptions import UnauthenticatedError
from agilesync.identity.application.services.session_service import (
    SUPERADMIN_PRINCIPAL,
    SessionManager,
)

BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class Principal:
    """Identity behind a validated user-registry token."""

    subject: str
    is_superadmin: bool = False

    @classmethod
    def of(cls, subject: str) -> Principal:
        return cls(subject=subject, is_superadmin=subject == SUPERADMIN_PRINCIPAL)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """
    Pull the token out of an ``Authorization: Bearer <token>`` header value.

    The scheme is matched case-insensitively; anything else (missing header,
    other scheme, empty token, embedded whitespace) is rejected.
    """
    if not authorization:
        raise UnauthenticatedError("Missing bearer token")
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token or any(ch.isspace() for ch in token):
        raise UnauthenticatedError("Malformed authorization header")
    return token


class AuthorizationGate:
    def __init__(self, sessions: SessionManager) -> None:
        self._sessions = sessions

    def authenticate_user(self, authorization: Optional[str]) -> Principal:
        token = extract_bearer_token(authorization)
        subject = self._sessions.resolve_user_token(token)
        if subject is None:
            raise UnauthenticatedError("Unauthorized")
        return Principal.of(subject)

    def authenticate_admin(self, authorization: Optional[str]) -> None:
        token = extract_bearer_token(authorization)
        if not self._sessions.resolve_admin_token(token):
            raise UnauthenticatedError("Unauthorized")

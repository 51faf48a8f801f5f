from __future__ import annotations

from dataclasses import dataclass

from agilesync.identity.domain.entities.user import User


@dataclass(frozen=True)
class UserProfile:
    """Public view of an authenticated principal; never carries the password hash."""

    id: str
    email: str
    display_name: str
    role: str

    @classmethod
    def from_user(cls, user: User) -> UserProfile:
        return cls(id=user.id, email=user.email, display_name=user.display_name, role=user.role.value)

# agilesync/identity/infrastructure/mapper/user_mapper.py
from datetime import datetime
from typing import Any, Dict, List, Set

from agilesync.shared.logging import get_logger
from agilesync.identity.domain.entities.user import Membership, ThemePreferences, User
from agilesync.identity.domain.value_objects.roles import OrgRole, UserRole
from agilesync.identity.infrastructure.persistence.models.user_model import UserModel

logger = get_logger(__name__)


class UserMapper:
    def to_domain(self, model: UserModel) -> User:
        memberships: List[Membership] = []
        seen: Set[str] = set()
        for raw in model.memberships or []:
            try:
                membership = self._membership_from_dict(raw)
            except (KeyError, ValueError):
                logger.warning(
                    "Malformed membership in DB; skipping",
                    user_id=model.id,
                    membership=raw,
                )
                continue
            # first entry per organization wins
            if membership.organization_id in seen:
                logger.warning(
                    "Duplicate membership in DB; skipping",
                    user_id=model.id,
                    membership=raw,
                )
                continue
            seen.add(membership.organization_id)
            memberships.append(membership)

        return User(
            id=model.id,
            tenant_id=model.tenant_id,
            email=model.email,
            display_name=model.display_name,
            password_hash=model.password_hash,
            role=UserRole(model.role),
            is_active=bool(model.is_active),
            memberships=memberships,
            theme_preferences=ThemePreferences(web=model.theme_web, pwa=model.theme_pwa),
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )

    def to_orm(self, entity: User) -> UserModel:
        return UserModel(
            id=entity.id,
            tenant_id=entity.tenant_id,
            email=entity.email,
            display_name=entity.display_name,
            password_hash=entity.password_hash,
            role=entity.role.value,
            is_active=bool(entity.is_active),
            memberships=[self._membership_to_dict(m) for m in entity.memberships],
            theme_web=entity.theme_preferences.web.value,
            theme_pwa=entity.theme_preferences.pwa.value,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            version=entity.version,
        )

    @staticmethod
    def _membership_to_dict(membership: Membership) -> Dict[str, Any]:
        return {
            "organization_id": membership.organization_id,
            "role": membership.role.value,
            "joined_at": membership.joined_at.isoformat(),
        }

    @staticmethod
    def _membership_from_dict(raw: Dict[str, Any]) -> Membership:
        return Membership(
            organization_id=str(raw["organization_id"]),
            role=OrgRole(raw.get("role", OrgRole.MEMBER.value)),
            joined_at=datetime.fromisoformat(raw["joined_at"]),
        )

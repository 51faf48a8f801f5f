from agilesync.identity.infrastructure.persistence.models.organization_model import OrganizationModel
from agilesync.identity.infrastructure.persistence.models.user_model import UserModel

__all__ = ["OrganizationModel", "UserModel"]

# agilesync/identity/infrastructure/mapper/organization_mapper.py
from agilesync.identity.domain.entities.organization import Organization
from agilesync.identity.infrastructure.persistence.models.organization_model import OrganizationModel


class OrganizationMapper:
    def to_domain(self, model: OrganizationModel) -> Organization:
        return Organization(
            id=model.id,
            tenant_id=model.tenant_id,
            name=model.name,
            slug=model.slug,
            description=model.description or "",
            is_active=bool(model.is_active),
            created_at=model.created_at,
            updated_at=model.updated_at,
            version=model.version,
        )

    def to_orm(self, entity: Organization) -> OrganizationModel:
        return OrganizationModel(
            id=entity.id,
            tenant_id=entity.tenant_id,
            name=entity.name,
            slug=entity.slug,
            description=entity.description,
            is_active=bool(entity.is_active),
            created_at=entity.created_at,
            updated_at=entity.updated_at,
            version=entity.version,
        )

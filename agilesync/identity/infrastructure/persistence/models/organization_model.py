"""
Organization ORM Model
Maps to organizations table
"""
from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from agilesync.shared.database.base_model import Base


class OrganizationModel(Base):
    """
    SQLAlchemy model for the organizations table.

    Multi-tenant root: tenant_id equals id for every row.
    """

    __tablename__ = "organizations"

    # Core Fields
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    # Status
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

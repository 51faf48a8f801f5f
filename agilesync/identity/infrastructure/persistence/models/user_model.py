"""
User ORM Model
Maps to users table
"""
from typing import Any, Dict, List

from sqlalchemy import JSON, Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agilesync.shared.database.base_model import Base


class UserModel(Base):
    """
    SQLAlchemy model for the users table.

    Memberships are embedded as a JSON list, one object per organization:
    {"organization_id": str, "role": str, "joined_at": ISO-8601 str}
    """

    __tablename__ = "users"

    # Core Fields
    email: Mapped[str] = mapped_column(String(256), unique=True, nullable=False, index=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="Member")

    # Status
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Embedded documents
    memberships: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)
    theme_web: Mapped[str] = mapped_column(String(10), nullable=False, default="dark")
    theme_pwa: Mapped[str] = mapped_column(String(10), nullable=False, default="dark")

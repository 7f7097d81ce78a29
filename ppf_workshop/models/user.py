"""User model module."""

from __future__ import annotations

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from ppf_workshop.models.base import Base, CreatedAtMixin, IdMixin, enum_column
from ppf_workshop.models.enums import UserRole


class User(Base, IdMixin, CreatedAtMixin):
    """Local team-member record; credentials live with the identity provider."""

    __tablename__ = "users"
    __table_args__ = (Index("idx_users_role", "role"),)

    username: Mapped[str] = mapped_column(String(120), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[UserRole] = mapped_column(enum_column(UserRole), nullable=False)

"""Reference catalog models: service packages and PPF products."""

from __future__ import annotations

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from ppf_workshop.models.base import Base, CreatedAtMixin, IdMixin


class ServicePackage(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "service_packages"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)


class PpfProduct(Base, IdMixin, CreatedAtMixin):
    __tablename__ = "ppf_products"
    __table_args__ = (UniqueConstraint("brand", "name", name="uq_ppf_products_brand_name"),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    brand: Mapped[str] = mapped_column(String(120), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    width_mm: Mapped[int] = mapped_column(Integer, default=1520, nullable=False)

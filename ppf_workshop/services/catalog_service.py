"""Reference data services: service packages, PPF products and rolls."""

from __future__ import annotations

import logging
from typing import Any

from ppf_workshop.core.exceptions import ConflictError, NotFoundError, ValidationError
from ppf_workshop.models import JobPpfUsage, PpfProduct, PpfRoll, RollStatus, ServicePackage
from ppf_workshop.schemas.catalog import PackageCreate, ProductCreate, RollCreate
from ppf_workshop.services.base_service import BaseService

logger = logging.getLogger(__name__)

DEFAULT_PACKAGES = (
    "Full Body PPF",
    "Full Body PPF + Ceramic",
    "Front Kit PPF",
    "Ceramic Coating",
    "Maintenance Wash",
)


class PackageService(BaseService):
    def list_packages(self) -> list[ServicePackage]:
        return self.db.query(ServicePackage).order_by(ServicePackage.name.asc()).all()

    def get_package(self, package_id: str) -> ServicePackage:
        package = self.db.query(ServicePackage).filter(ServicePackage.id == package_id).first()
        if package is None:
            raise NotFoundError(f"Service package not found: {package_id}")
        return package

    def create_package(self, payload: PackageCreate) -> ServicePackage:
        if self.db.query(ServicePackage.id).filter(ServicePackage.name == payload.name).first() is not None:
            raise ConflictError(f"Service package already exists: {payload.name}")
        package = ServicePackage(name=payload.name)
        self.db.add(package)
        self.commit()
        self.db.refresh(package)
        return package

    def delete_package(self, package_id: str) -> None:
        package = self.get_package(package_id)
        self.db.delete(package)
        self.commit()

    def seed_defaults(self) -> int:
        """Insert the standard packages that are missing; returns how many were added."""
        existing = {name for (name,) in self.db.query(ServicePackage.name).all()}
        missing = [name for name in DEFAULT_PACKAGES if name not in existing]
        for name in missing:
            self.db.add(ServicePackage(name=name))
        if missing:
            self.commit()
            logger.info("catalog.packages.seeded", extra={"event": "catalog.packages.seeded"})
        return len(missing)


class ProductService(BaseService):
    def list_products(self) -> list[PpfProduct]:
        return self.db.query(PpfProduct).order_by(PpfProduct.brand.asc(), PpfProduct.name.asc()).all()

    def get_product(self, product_id: str) -> PpfProduct:
        product = self.db.query(PpfProduct).filter(PpfProduct.id == product_id).first()
        if product is None:
            raise NotFoundError(f"PPF product not found: {product_id}")
        return product

    def create_product(self, payload: ProductCreate) -> PpfProduct:
        duplicate = (
            self.db.query(PpfProduct.id)
            .filter(PpfProduct.brand == payload.brand, PpfProduct.name == payload.name)
            .first()
        )
        if duplicate is not None:
            raise ConflictError(f"PPF product already exists: {payload.brand} {payload.name}")
        product = PpfProduct(**payload.model_dump())
        self.db.add(product)
        self.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product_id: str) -> None:
        product = self.get_product(product_id)
        if self.db.query(PpfRoll.id).filter(PpfRoll.product_id == product.id).first() is not None:
            raise ConflictError("PPF product is still referenced by rolls.", product_id=product.id)
        self.db.delete(product)
        self.commit()


class RollService(BaseService):
    def list_rolls(self, status: RollStatus | None = None) -> list[PpfRoll]:
        query = self.db.query(PpfRoll)
        if status is not None:
            query = query.filter(PpfRoll.status == status)
        return query.order_by(PpfRoll.created_at.desc()).all()

    def get_roll(self, roll_id: str) -> PpfRoll:
        roll = self.db.query(PpfRoll).filter(PpfRoll.id == roll_id).first()
        if roll is None:
            raise NotFoundError(f"PPF roll not found: {roll_id}", roll_id=roll_id)
        return roll

    def create_roll(self, payload: RollCreate) -> PpfRoll:
        if self.db.query(PpfProduct.id).filter(PpfProduct.id == payload.product_id).first() is None:
            raise ValidationError(
                f"Unknown PPF product: {payload.product_id}",
                errors=[{"field": "productId", "message": "product does not exist"}],
            )
        if self.db.query(PpfRoll.id).filter(PpfRoll.roll_id == payload.roll_id).first() is not None:
            raise ConflictError(f"Roll id already in use: {payload.roll_id}")

        roll = PpfRoll(**payload.model_dump())
        roll.status = RollStatus.DEPLETED if roll.used_length_mm >= roll.total_length_mm else RollStatus.ACTIVE
        self.db.add(roll)
        self.commit()
        self.db.refresh(roll)
        logger.info("roll.created", extra={"event": "roll.created", "roll_id": roll.id})
        return roll

    def update_roll(self, roll_id: str, changes: dict[str, Any]) -> PpfRoll:
        roll = self.get_roll(roll_id)
        total = changes.get("total_length_mm", roll.total_length_mm)
        used = changes.get("used_length_mm", roll.used_length_mm)
        if used > total:
            raise ValidationError(
                "Used length cannot exceed total length.",
                errors=[{"field": "usedLengthMm", "message": f"must be <= totalLengthMm ({total})"}],
            )

        for name, value in changes.items():
            setattr(roll, name, value)
        if "status" not in changes:
            if roll.remaining_length_mm == 0 and roll.status == RollStatus.ACTIVE:
                roll.status = RollStatus.DEPLETED
            elif roll.remaining_length_mm > 0 and roll.status == RollStatus.DEPLETED:
                roll.status = RollStatus.ACTIVE
        self.commit()
        self.db.refresh(roll)
        logger.info("roll.updated", extra={"event": "roll.updated", "roll_id": roll.id})
        return roll

    def delete_roll(self, roll_id: str) -> None:
        roll = self.get_roll(roll_id)
        if self.db.query(JobPpfUsage.id).filter(JobPpfUsage.roll_id == roll.id).first() is not None:
            raise ConflictError("PPF roll is still referenced by usage entries.", roll_id=roll.id)
        self.db.delete(roll)
        self.commit()

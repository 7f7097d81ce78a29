"""PPF product endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ppf_workshop.api.v1._authz import require
from ppf_workshop.auth.identity import Identity
from ppf_workshop.core.dependencies import get_db_session
from ppf_workshop.schemas.catalog import ProductCreate, ProductResponse
from ppf_workshop.schemas.common import MessageResponse
from ppf_workshop.services.catalog_service import ProductService

router = APIRouter(prefix="/ppf-products", tags=["ppf-products"])


@router.get("", response_model=list[ProductResponse])
def list_products(_: Identity = Depends(require("catalog.read")), db: Session = Depends(get_db_session)):
    return ProductService(db).list_products()


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    _: Identity = Depends(require("catalog.write")),
    db: Session = Depends(get_db_session),
):
    return ProductService(db).create_product(payload)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, _: Identity = Depends(require("catalog.read")), db: Session = Depends(get_db_session)):
    return ProductService(db).get_product(product_id)


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    _: Identity = Depends(require("catalog.write")),
    db: Session = Depends(get_db_session),
):
    ProductService(db).delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")

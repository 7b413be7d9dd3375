# app/routers/products.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..core.api import ok, list_meta
from ..core.db import get_db
from ..core.security import get_current_user
from ..models import Profile
from ..schemas.product import ProductCreate, ProductRead
from ..services import catalog_service

router = APIRouter(prefix="/products", tags=["products"])


@router.get("")
def list_products(
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows = [ProductRead.model_validate(p) for p in catalog_service.list_products(db)]
    return ok(rows, meta=list_meta(rows))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    p = catalog_service.create_product(db, actor=current, payload=payload)
    return ok(ProductRead.model_validate(p), status_code=status.HTTP_201_CREATED)


@router.get("/{product_id}")
def get_product(
    product_id: str,
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ok(ProductRead.model_validate(catalog_service.get_product(db, product_id)))

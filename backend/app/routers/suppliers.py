# app/routers/suppliers.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..core.api import ok, list_meta
from ..core.db import get_db
from ..core.security import get_current_user
from ..models import Profile
from ..schemas.supplier import SupplierCreate, SupplierRead
from ..services import catalog_service

router = APIRouter(prefix="/suppliers", tags=["suppliers"])


@router.get("")
def list_suppliers(
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows = [SupplierRead.model_validate(s) for s in catalog_service.list_suppliers(db)]
    return ok(rows, meta=list_meta(rows))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_supplier(
    payload: SupplierCreate,
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    s = catalog_service.create_supplier(db, actor=current, payload=payload)
    return ok(SupplierRead.model_validate(s), status_code=status.HTTP_201_CREATED)


@router.get("/{supplier_id}")
def get_supplier(
    supplier_id: str,
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ok(SupplierRead.model_validate(catalog_service.get_supplier(db, supplier_id)))

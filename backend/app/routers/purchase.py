# app/routers/purchase.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app.core.api import ok, list_meta
from app.core.db import get_db
from app.core.security import get_current_user
from app.models import Profile
from app.schemas.purchase import POCreate, StatusLiteral
from app.services.order_assembly import order_from_form
from app.services.purchase_service import (
    create_purchase_order,
    get_purchase_order,
    list_purchase_orders,
)

router = APIRouter(prefix="/purchase-orders", tags=["purchase-orders"])


def _created(db: Session, po_id: str):
    detail = get_purchase_order(db, po_id)
    return ok(
        detail,
        status_code=status.HTTP_201_CREATED,
        headers={"Location": f"/purchase-orders/{po_id}"},
    )


# --- LIST ---
@router.get("")
def list_orders(
    status_: Optional[StatusLiteral] = Query(None, alias="status"),
    supplier_id: Optional[str] = Query(None, alias="supplierId"),
    skip: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=500),
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    rows = list_purchase_orders(db, status=status_, supplier_id=supplier_id, skip=skip, limit=limit)
    return ok(rows, meta=list_meta(rows))


# --- CREATE (JSON, nested items) ---
@router.post("", status_code=status.HTTP_201_CREATED)
def create_order(
    payload: POCreate,
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    po = create_purchase_order(db, actor=current, payload=payload)
    return _created(db, po.id)


# --- CREATE (form-encoded, items[i][field]) ---
@router.post("/form", status_code=status.HTTP_201_CREATED)
async def create_order_from_form(
    request: Request,
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    form = await request.form()
    payload = order_from_form({k: v for k, v in form.multi_items() if isinstance(v, str)})
    po = create_purchase_order(db, actor=current, payload=payload)
    return _created(db, po.id)


# --- DETAIL ---
@router.get("/{po_id}")
def get_order(
    po_id: str,
    current: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return ok(get_purchase_order(db, po_id))

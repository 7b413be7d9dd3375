from __future__ import annotations
from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import NotFound, StoreError
from app.domain.constants import PO_STATUS_DRAFT
from app.models import PurchaseOrder, POItem, Supplier, Product, Profile
from app.schemas.purchase import POCreate, PORead, PODetail, POItemRead
from app.services.codes import generate_po_number
from app.services.order_assembly import compute_total, line_total

logger = logging.getLogger(__name__)


def _check_references(db: Session, payload: POCreate) -> None:
    if not db.get(Supplier, payload.supplier_id):
        raise NotFound("Supplier not found.")

    product_ids = {i.product_id for i in payload.items}
    found = {
        pid for (pid,) in db.query(Product.id).filter(Product.id.in_(sorted(product_ids))).all()
    }
    missing = sorted(product_ids - found)
    if missing:
        raise NotFound(f"Product not found: {', '.join(missing)}")


def create_purchase_order(db: Session, *, actor: Profile, payload: POCreate) -> PurchaseOrder:
    """
    Header row first (flushed for its id), then one po_items row per line.
    Both inserts share one transaction; any store failure rolls back the
    header as well, so an order never exists without its items.
    """
    _check_references(db, payload)

    total = compute_total(payload.items)
    po = PurchaseOrder(
        po_number=generate_po_number(),
        supplier_id=payload.supplier_id,
        status=PO_STATUS_DRAFT,
        total_amount=total,
        notes=payload.notes,
        created_by=actor.id,
    )
    try:
        db.add(po)
        db.flush()  # header id

        db.add_all([
            POItem(
                po_id=po.id,
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total_price=line_total(item.quantity, item.unit_price),
            )
            for item in payload.items
        ])
        db.flush()

        db.commit()
        db.refresh(po)
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("create_purchase_order failed (supplier=%s, by=%s)", payload.supplier_id, actor.id)
        raise StoreError(str(getattr(e, "orig", None) or e))

    logger.info(
        "purchase order %s created by %s: %d items, total %s",
        po.po_number, actor.id, len(payload.items), total,
    )
    return po


def to_read(po: PurchaseOrder, supplier_name: Optional[str] = None) -> PORead:
    data = PORead.model_validate(po)
    data.supplier_name = supplier_name if supplier_name is not None else (
        po.supplier.name if po.supplier else None
    )
    return data


# ---- Read side ----
def list_purchase_orders(
    db: Session,
    *,
    status: Optional[str] = None,
    supplier_id: Optional[str] = None,
    skip: int = 0,
    limit: Optional[int] = None,
) -> List[PORead]:
    q = (
        db.query(PurchaseOrder, Supplier.name)
        .outerjoin(Supplier, Supplier.id == PurchaseOrder.supplier_id)
    )
    if status:
        q = q.filter(PurchaseOrder.status == status)
    if supplier_id:
        q = q.filter(PurchaseOrder.supplier_id == supplier_id)

    q = q.order_by(PurchaseOrder.created_at.desc())
    if skip:
        q = q.offset(max(0, skip))
    if limit is not None:
        q = q.limit(min(max(1, limit), 500))

    return [to_read(po, supplier_name=name) for po, name in q.all()]


def get_purchase_order(db: Session, po_id: str) -> PODetail:
    po = (
        db.query(PurchaseOrder)
        .options(
            joinedload(PurchaseOrder.supplier),
            joinedload(PurchaseOrder.items).joinedload(POItem.product),
        )
        .filter(PurchaseOrder.id == po_id)
        .one_or_none()
    )
    if not po:
        raise NotFound("Purchase order not found.")

    head = to_read(po)
    items = []
    for it in po.items:
        row = POItemRead.model_validate(it)
        if it.product is not None:
            row.product_name = it.product.name
            row.product_sku = it.product.sku
        items.append(row)
    return PODetail(**head.model_dump(), items=items)

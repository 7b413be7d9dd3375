from __future__ import annotations
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.constants import PO_STATUS_PENDING, RECENT_ORDERS_LIMIT
from app.models import PurchaseOrder, Product, Supplier
from app.services.purchase_service import list_purchase_orders


def dashboard_summary(db: Session) -> Dict[str, Any]:
    """Counts and sums straight from the tables; nothing is cached."""
    total_pos = db.query(func.count(PurchaseOrder.id)).scalar() or 0
    active_pos = (
        db.query(func.count(PurchaseOrder.id))
        .filter(PurchaseOrder.status == PO_STATUS_PENDING)
        .scalar()
    ) or 0
    total_products = db.query(func.count(Product.id)).scalar() or 0
    total_suppliers = db.query(func.count(Supplier.id)).scalar() or 0
    total_value = db.query(func.coalesce(func.sum(PurchaseOrder.total_amount), 0)).scalar()

    recent = list_purchase_orders(db, limit=RECENT_ORDERS_LIMIT)

    return {
        "totalPOs": int(total_pos),
        "activePOs": int(active_pos),
        "totalProducts": int(total_products),
        "totalSuppliers": int(total_suppliers),
        "totalValue": Decimal(str(total_value or 0)).quantize(Decimal("0.01")),
        "recentOrders": recent,
    }

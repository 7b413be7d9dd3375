from sqlalchemy import Column, String, DateTime, Numeric, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship
from ..core.db import Base
from ..domain.constants import PO_STATUSES, PO_STATUS_DRAFT
from ._common import new_id, utcnow

_STATUS_SQL = ",".join(f"'{s}'" for s in PO_STATUSES)


class PurchaseOrder(Base):
    __tablename__ = "purchase_orders"

    id           = Column(String(36), primary_key=True, default=new_id)
    po_number    = Column(String(50), nullable=False, unique=True)
    supplier_id  = Column(String(36), ForeignKey("suppliers.id"), nullable=False)
    status       = Column(String(20), nullable=False, default=PO_STATUS_DRAFT)
    total_amount = Column(Numeric(14, 2), nullable=False)
    notes        = Column(String(2000))
    created_by   = Column(String(36), ForeignKey("profiles.id"), nullable=False)
    created_at   = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at   = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_po_total_nonneg"),
        CheckConstraint(f"status IN ({_STATUS_SQL})", name="ck_po_status"),
        Index("ix_purchase_orders_created_at", "created_at"),
        Index("ix_purchase_orders_status", "status"),
    )

    supplier = relationship("Supplier", back_populates="purchase_orders")
    items    = relationship("POItem", back_populates="purchase_order", order_by="POItem.created_at")

from sqlalchemy import Column, Integer, String, DateTime, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from ..core.db import Base
from ._common import new_id, utcnow


class POItem(Base):
    __tablename__ = "po_items"

    id          = Column(String(36), primary_key=True, default=new_id)
    po_id       = Column(String(36), ForeignKey("purchase_orders.id"), nullable=False, index=True)
    product_id  = Column(String(36), ForeignKey("products.id"), nullable=False)
    quantity    = Column(Integer,    nullable=False)
    unit_price  = Column(Numeric(12, 2), nullable=False)
    total_price = Column(Numeric(14, 2), nullable=False)
    created_at  = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_po_items_qty_min1"),
        CheckConstraint("unit_price >= 0", name="ck_po_items_price_nonneg"),
    )

    purchase_order = relationship("PurchaseOrder", back_populates="items")
    product        = relationship("Product", back_populates="po_items")

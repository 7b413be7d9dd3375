from sqlalchemy import Column, Integer, String, DateTime, Numeric, CheckConstraint
from sqlalchemy.orm import relationship
from ..core.db import Base
from ._common import new_id, utcnow


class Product(Base):
    __tablename__ = "products"

    id               = Column(String(36),  primary_key=True, default=new_id)
    name             = Column(String(200), nullable=False)
    description      = Column(String(1000))
    sku              = Column(String(50),  nullable=False, unique=True)
    unit_of_measure  = Column(String(20),  nullable=False)
    cost             = Column(Numeric(12, 2), nullable=False)
    quantity_on_hand = Column(Integer,     nullable=False, default=0)
    created_at       = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at       = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("cost >= 0", name="ck_products_cost_nonneg"),
        CheckConstraint("quantity_on_hand >= 0", name="ck_products_qoh_nonneg"),
    )

    po_items = relationship("POItem", back_populates="product")

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from ..core.db import Base
from ._common import new_id, utcnow


class Supplier(Base):
    __tablename__ = "suppliers"

    id             = Column(String(36),  primary_key=True, default=new_id)
    name           = Column(String(200), nullable=False)
    contact_person = Column(String(200))
    email          = Column(String(200))
    phone          = Column(String(50))
    address        = Column(String(500))
    created_at     = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at     = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    purchase_orders = relationship("PurchaseOrder", back_populates="supplier")

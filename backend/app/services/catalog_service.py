from __future__ import annotations
from typing import List
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFound, StoreError
from app.domain.constants import SKU_PREFIX
from app.models import Supplier, Product, Profile
from app.schemas.supplier import SupplierCreate
from app.schemas.product import ProductCreate
from app.services.codes import generate_code

logger = logging.getLogger(__name__)


def _save(db: Session, row, what: str):
    try:
        db.add(row)
        db.commit()
        db.refresh(row)
        return row
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("%s insert failed", what)
        raise StoreError(str(getattr(e, "orig", None) or e))


# ---- Suppliers ----
def create_supplier(db: Session, *, actor: Profile, payload: SupplierCreate) -> Supplier:
    supplier = Supplier(
        name=payload.name,
        contact_person=payload.contact_person,
        email=str(payload.email).lower() if payload.email else None,
        phone=payload.phone,
        address=payload.address,
    )
    supplier = _save(db, supplier, "supplier")
    logger.info("supplier %s (%s) created by %s", supplier.id, supplier.name, actor.id)
    return supplier


def list_suppliers(db: Session) -> List[Supplier]:
    return db.query(Supplier).order_by(Supplier.name.asc()).all()


def get_supplier(db: Session, supplier_id: str) -> Supplier:
    s = db.get(Supplier, supplier_id)
    if not s:
        raise NotFound("Supplier not found.")
    return s


# ---- Products ----
def create_product(db: Session, *, actor: Profile, payload: ProductCreate) -> Product:
    product = Product(
        name=payload.name,
        description=payload.description,
        sku=generate_code(SKU_PREFIX),
        unit_of_measure=payload.unit_of_measure,
        cost=payload.cost,
        quantity_on_hand=0,
    )
    product = _save(db, product, "product")
    logger.info("product %s (sku=%s) created by %s", product.id, product.sku, actor.id)
    return product


def list_products(db: Session) -> List[Product]:
    return db.query(Product).order_by(Product.name.asc()).all()


def get_product(db: Session, product_id: str) -> Product:
    p = db.get(Product, product_id)
    if not p:
        raise NotFound("Product not found.")
    return p

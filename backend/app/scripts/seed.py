"""
Demo data for a fresh database (idempotent).

    python -m app.scripts.seed
"""
import logging
import os
from contextlib import contextmanager
from decimal import Decimal

from sqlalchemy import select

from app.core.db import SessionLocal, Base, engine
from app.core.logging_setup import configure_logging
from app.core.security import hash_password
from app.models import Profile, Supplier, Product, PurchaseOrder
from app.schemas.purchase import POCreate
from app.services.codes import generate_code
from app.services.purchase_service import create_purchase_order

logger = logging.getLogger(__name__)


# ---------- helpers ----------

@contextmanager
def session_scope():
    """One-off session; rollback on error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def get_one(db, model, **by):
    return db.execute(select(model).filter_by(**by)).scalars().first()


def get_or_create(db, model, unique_by: dict, defaults: dict | None = None):
    """Look up by unique_by, create when missing."""
    inst = get_one(db, model, **unique_by)
    if inst:
        return inst, False
    data = {**unique_by, **(defaults or {})}
    inst = model(**data)
    db.add(inst)
    db.flush()
    return inst, True


# ---------- seed rows ----------

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@procurement-demo.com")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "Passw0rd!")

SUPPLIERS = [
    {"name": "Northwind Traders", "contact_person": "Anne Dodsworth",
     "email": "orders@northwind-traders.com", "phone": "+1 555 0100"},
    {"name": "Contoso Industrial", "contact_person": "Sam Reyes",
     "email": "sales@contoso-industrial.com", "phone": "+1 555 0199"},
]

PRODUCTS = [
    {"name": "Ball bearing 6204", "unit_of_measure": "pcs", "cost": Decimal("4.75")},
    {"name": "V-belt A42",        "unit_of_measure": "pcs", "cost": Decimal("11.20")},
    {"name": "Hydraulic oil 46",  "unit_of_measure": "l",   "cost": Decimal("3.10")},
]


def seed():
    Base.metadata.create_all(bind=engine, checkfirst=True)
    with session_scope() as db:
        admin, _ = get_or_create(
            db, Profile, {"email": ADMIN_EMAIL},
            {"full_name": "Demo Admin", "role": "admin",
             "hashed_password": hash_password(ADMIN_PASSWORD)},
        )
        suppliers = [
            get_or_create(db, Supplier, {"name": s["name"]}, s)[0] for s in SUPPLIERS
        ]
        products = [
            get_or_create(db, Product, {"name": p["name"]}, {**p, "sku": generate_code()})[0]
            for p in PRODUCTS
        ]
        db.commit()

        if db.query(PurchaseOrder).count() == 0:
            payload = POCreate(
                supplier_id=suppliers[0].id,
                notes="Monthly restock",
                items=[
                    {"product_id": products[0].id, "quantity": 20, "unit_price": "4.75"},
                    {"product_id": products[1].id, "quantity": 4, "unit_price": "11.20"},
                ],
            )
            create_purchase_order(db, actor=admin, payload=payload)

    logger.info("seed finished (admin=%s)", ADMIN_EMAIL)


if __name__ == "__main__":
    configure_logging()
    seed()

"""
Shared fixtures: in-memory SQLite, fresh schema per test, signed-in client.
"""
import os

# Must be set before app.core.* is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ.setdefault("JWT_SECRET", "test-secret")

from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient

from app.core.db import Base, engine, SessionLocal
from app.main import app
from app.models import Profile, Supplier, Product
from app.services.codes import generate_code

PASSWORD = "Passw0rd!"


@pytest.fixture(autouse=True)
def _schema() -> Generator[None, None, None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c


def signup(client: TestClient, email: str = "buyer@acme-corp.com", full_name: str = "Bea Buyer") -> dict:
    r = client.post("/auth/signup", json={"email": email, "password": PASSWORD, "fullName": full_name})
    assert r.status_code == 201, r.text
    return r.json()["data"]


@pytest.fixture
def session_data(client) -> dict:
    return signup(client)


@pytest.fixture
def auth_headers(session_data) -> dict:
    return {"Authorization": f"Bearer {session_data['access_token']}"}


@pytest.fixture
def actor(db, session_data) -> Profile:
    return db.get(Profile, session_data["user"]["id"])


@pytest.fixture
def supplier(db) -> Supplier:
    s = Supplier(name="Northwind Traders", email="orders@northwind-traders.com")
    db.add(s)
    db.commit()
    db.refresh(s)
    return s


@pytest.fixture
def products(db) -> list:
    rows = [
        Product(name=name, sku=generate_code(), unit_of_measure="pcs", cost=Decimal(cost))
        for name, cost in [("Ball bearing", "4.75"), ("V-belt", "11.20"), ("Hydraulic oil", "3.10")]
    ]
    db.add_all(rows)
    db.commit()
    for p in rows:
        db.refresh(p)
    return rows

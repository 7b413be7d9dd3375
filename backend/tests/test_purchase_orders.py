from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.core.errors import StoreError
from app.models import PurchaseOrder, POItem
from app.schemas.purchase import POCreate
from app.services import purchase_service


def _payload(supplier, products, lines):
    return {
        "supplierId": supplier.id,
        "notes": "Monthly restock",
        "items": [
            {"productId": products[i].id, "quantity": q, "unitPrice": p}
            for i, (q, p) in enumerate(lines)
        ],
    }


def test_create_order_and_read_back(client, auth_headers, db, supplier, products, session_data):
    body = _payload(supplier, products, [(2, "19.99"), (1, "5.00"), (4, "0.25")])
    r = client.post("/purchase-orders", headers=auth_headers, json=body)
    assert r.status_code == 201, r.text

    po = r.json()["data"]
    assert r.headers["location"] == f"/purchase-orders/{po['id']}"
    assert po["status"] == "draft"
    assert po["po_number"].startswith("PO-")
    assert po["total_amount"] == 45.98
    assert po["created_by"] == session_data["user"]["id"]
    assert po["supplier_name"] == "Northwind Traders"
    assert sorted(i["total_price"] for i in po["items"]) == [1.0, 5.0, 39.98]

    listed = client.get("/purchase-orders", headers=auth_headers).json()["data"]
    mine = [o for o in listed if o["id"] == po["id"]]
    assert len(mine) == 1
    assert mine[0]["total_amount"] == 45.98
    assert mine[0]["supplier_name"] == "Northwind Traders"

    assert db.query(POItem).filter(POItem.po_id == po["id"]).count() == 3
    stored = db.get(PurchaseOrder, po["id"])
    assert stored.total_amount == Decimal("45.98")


def test_spec_example_total(client, auth_headers, supplier, products):
    body = _payload(supplier, products, [(2, 19.99), (1, 5.00)])
    r = client.post("/purchase-orders", headers=auth_headers, json=body)
    assert r.status_code == 201
    assert r.json()["data"]["total_amount"] == 44.98


def test_zero_items_creates_nothing(client, auth_headers, db, supplier):
    r = client.post("/purchase-orders", headers=auth_headers, json={"supplierId": supplier.id, "items": []})
    assert r.status_code == 422
    assert "items" in r.json()["meta"]["fieldErrors"]
    assert db.query(PurchaseOrder).count() == 0
    assert db.query(POItem).count() == 0


def test_zero_quantity_creates_nothing(client, auth_headers, db, supplier, products):
    body = _payload(supplier, products, [(0, "1.00")])
    r = client.post("/purchase-orders", headers=auth_headers, json=body)
    assert r.status_code == 422
    assert "items.0.quantity" in r.json()["meta"]["fieldErrors"]
    assert db.query(PurchaseOrder).count() == 0


def test_unknown_product_is_404(client, auth_headers, db, supplier, products):
    body = _payload(supplier, products, [(1, "1.00")])
    body["items"][0]["productId"] = "00000000-0000-4000-8000-000000000000"
    r = client.post("/purchase-orders", headers=auth_headers, json=body)
    assert r.status_code == 404
    assert db.query(PurchaseOrder).count() == 0


def test_unauthenticated_order_is_rejected(client, db, supplier, products):
    r = client.post("/purchase-orders", json=_payload(supplier, products, [(1, "1.00")]))
    assert r.status_code == 401
    assert db.query(PurchaseOrder).count() == 0


def test_form_submission(client, auth_headers, db, supplier, products):
    form = {"supplierId": supplier.id, "notes": ""}
    for i, (q, p) in enumerate([(2, "19.99"), (1, "5.00")]):
        form[f"items[{i}][productId]"] = products[i].id
        form[f"items[{i}][quantity]"] = str(q)
        form[f"items[{i}][unitPrice]"] = p
    r = client.post("/purchase-orders/form", headers=auth_headers, data=form)
    assert r.status_code == 201, r.text
    po = r.json()["data"]
    assert po["total_amount"] == 44.98
    assert po["notes"] is None
    assert len(po["items"]) == 2


def test_form_submission_with_gap(client, auth_headers, db, supplier, products):
    form = {
        "supplierId": supplier.id,
        "items[0][productId]": products[0].id, "items[0][quantity]": "1", "items[0][unitPrice]": "1",
        "items[2][productId]": products[1].id, "items[2][quantity]": "1", "items[2][unitPrice]": "1",
    }
    r = client.post("/purchase-orders/form", headers=auth_headers, data=form)
    assert r.status_code == 422
    assert "items" in r.json()["meta"]["fieldErrors"]
    assert db.query(PurchaseOrder).count() == 0


def test_item_insert_failure_rolls_back_header(db, actor, supplier, products, monkeypatch):
    # NULL total_price violates NOT NULL on the second insert
    monkeypatch.setattr(purchase_service, "line_total", lambda q, p: None)
    payload = POCreate.model_validate(_payload(supplier, products, [(1, "2.00")]))

    with pytest.raises(StoreError):
        purchase_service.create_purchase_order(db, actor=actor, payload=payload)

    assert db.query(PurchaseOrder).count() == 0
    assert db.query(POItem).count() == 0


def test_listing_is_newest_first_with_filters(client, auth_headers, db, actor, supplier, products):
    base = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for n, status in enumerate(["draft", "pending", "approved"]):
        db.add(PurchaseOrder(
            po_number=f"PO-{n}", supplier_id=supplier.id, status=status,
            total_amount=Decimal("1.00"), created_by=actor.id,
            created_at=base + timedelta(days=n),
        ))
    db.commit()

    rows = client.get("/purchase-orders", headers=auth_headers).json()["data"]
    assert [r["po_number"] for r in rows] == ["PO-2", "PO-1", "PO-0"]

    pending = client.get("/purchase-orders?status=pending", headers=auth_headers).json()["data"]
    assert [r["po_number"] for r in pending] == ["PO-1"]


def test_detail_not_found(client, auth_headers):
    r = client.get("/purchase-orders/missing", headers=auth_headers)
    assert r.status_code == 404


def test_sub_cent_price_creates_nothing(client, auth_headers, db, supplier, products):
    body = _payload(supplier, products, [(1000, "0.125")])
    r = client.post("/purchase-orders", headers=auth_headers, json=body)
    assert r.status_code == 422
    assert "items.0.unitPrice" in r.json()["meta"]["fieldErrors"]
    assert db.query(PurchaseOrder).count() == 0


def test_oversized_total_is_a_field_error(client, auth_headers, db, supplier, products):
    body = _payload(supplier, products, [(1_000_000, "9999999999.99")])
    r = client.post("/purchase-orders", headers=auth_headers, json=body)
    assert r.status_code == 422
    assert "items" in r.json()["meta"]["fieldErrors"]
    assert db.query(PurchaseOrder).count() == 0

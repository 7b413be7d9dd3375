import uuid
from decimal import Decimal

import pytest

from app.core.errors import ValidationFailed
from app.schemas.purchase import POItemIn
from app.services.order_assembly import compute_total, items_from_form, line_total, order_from_form


def _item(q, p):
    return POItemIn(product_id=str(uuid.uuid4()), quantity=q, unit_price=p)


@pytest.mark.parametrize("items, expected", [
    ([(2, "19.99"), (1, "5.00")], Decimal("44.98")),
    ([(3, "0.10")], Decimal("0.30")),
    ([(7, "0.07"), (13, "1.13"), (1, "0")], Decimal("15.18")),
    ([(1000, "9999.99")], Decimal("9999990.00")),
])
def test_compute_total_exact(items, expected):
    assert compute_total([_item(q, p) for q, p in items]) == expected


def test_line_total():
    assert line_total(3, Decimal("0.10")) == Decimal("0.30")


def _form(n_items: int, **extra) -> dict:
    form = {"supplierId": str(uuid.uuid4()), "notes": "urgent"}
    for i in range(n_items):
        form[f"items[{i}][productId]"] = str(uuid.uuid4())
        form[f"items[{i}][quantity]"] = "2"
        form[f"items[{i}][unitPrice]"] = "19.99"
    form.update(extra)
    return form


def test_items_from_form_orders_by_index():
    form = _form(3)
    rows = items_from_form(form)
    assert [r["productId"] for r in rows] == [form[f"items[{i}][productId]"] for i in range(3)]


def test_items_from_form_ignores_unrelated_keys():
    assert items_from_form({"supplierId": "x", "items[]": "junk"}) == []


def test_items_from_form_rejects_gaps():
    form = _form(1)
    form["items[2][productId]"] = str(uuid.uuid4())
    with pytest.raises(ValidationFailed) as ei:
        items_from_form(form)
    assert "items" in ei.value.field_errors


def test_order_from_form_validates():
    po = order_from_form(_form(2))
    assert len(po.items) == 2
    assert compute_total(po.items) == Decimal("79.96")


def test_order_from_form_zero_items():
    with pytest.raises(ValidationFailed) as ei:
        order_from_form(_form(0))
    assert "items" in ei.value.field_errors


def test_order_from_form_bad_quantity():
    with pytest.raises(ValidationFailed) as ei:
        order_from_form(_form(1, **{"items[0][quantity]": "0"}))
    assert "items.0.quantity" in ei.value.field_errors


def test_items_from_form_ignores_zero_padded_indices():
    form = _form(1, **{"items[00][quantity]": "3", "items[01][productId]": "x"})
    rows = items_from_form(form)
    assert len(rows) == 1
    assert rows[0]["quantity"] == "2"

import uuid
from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.schemas.common import field_errors
from app.schemas.product import ProductCreate
from app.schemas.purchase import POCreate
from app.schemas.supplier import SupplierCreate
from app.schemas.user import SignupIn


def _errors(model, data) -> dict:
    with pytest.raises(ValidationError) as ei:
        model.model_validate(data)
    return field_errors(ei.value.errors())


def test_supplier_minimal_and_blank_email():
    s = SupplierCreate.model_validate({"name": "  Acme  ", "email": "", "contactPerson": ""})
    assert s.name == "Acme"
    assert s.email is None
    assert s.contact_person is None


def test_supplier_rejects_short_name_and_bad_email():
    errs = _errors(SupplierCreate, {"name": "A", "email": "not-an-email"})
    assert set(errs) == {"name", "email"}


def test_product_cost_is_cents_and_non_negative():
    p = ProductCreate.model_validate({"name": "Bolt", "unitOfMeasure": "pcs", "cost": "1.5"})
    assert p.cost == Decimal("1.50")

    errs = _errors(ProductCreate, {"name": "Bolt", "unitOfMeasure": "pcs", "cost": "1.005"})
    assert set(errs) == {"cost"}

    errs = _errors(ProductCreate, {"name": "Bolt", "unitOfMeasure": "", "cost": -1})
    assert set(errs) == {"unitOfMeasure", "cost"}


def test_order_coerces_form_strings():
    pid = str(uuid.uuid4())
    po = POCreate.model_validate({
        "supplierId": str(uuid.uuid4()),
        "notes": "  ",
        "items": [{"productId": pid, "quantity": "2", "unitPrice": "19.99"}],
    })
    assert po.notes is None
    assert po.items[0].quantity == 2
    assert po.items[0].unit_price == Decimal("19.99")


def test_order_requires_items():
    errs = _errors(POCreate, {"supplierId": str(uuid.uuid4()), "items": []})
    assert errs == {"items": ["At least one item is required"]}


def test_order_item_errors_are_keyed_by_position():
    errs = _errors(POCreate, {
        "supplierId": "nope",
        "items": [
            {"productId": str(uuid.uuid4()), "quantity": 1, "unitPrice": 1},
            {"productId": str(uuid.uuid4()), "quantity": 0, "unitPrice": -2},
        ],
    })
    assert errs["supplierId"] == ["Please select a supplier"]
    assert "items.1.quantity" in errs
    assert "items.1.unitPrice" in errs
    assert not any(k.startswith("items.0") for k in errs)


def test_signup_rules():
    errs = _errors(SignupIn, {"email": "x", "password": "123", "fullName": "J"})
    assert set(errs) == {"email", "password", "fullName"}


def test_field_errors_strips_request_location():
    errs = field_errors([
        {"loc": ("body", "items", 0, "quantity"), "msg": "Input should be greater than or equal to 1"},
        {"loc": ("body", "name"), "msg": "Value error, too short"},
    ])
    assert errs == {
        "items.0.quantity": ["Input should be greater than or equal to 1"],
        "name": ["too short"],
    }


def test_order_rejects_sub_cent_prices():
    errs = _errors(POCreate, {
        "supplierId": str(uuid.uuid4()),
        "items": [{"productId": str(uuid.uuid4()), "quantity": 1000, "unitPrice": "0.125"}],
    })
    assert set(errs) == {"items.0.unitPrice"}


def test_order_total_must_fit_amount_columns():
    errs = _errors(POCreate, {
        "supplierId": str(uuid.uuid4()),
        "items": [{"productId": str(uuid.uuid4()), "quantity": 1_000_000, "unitPrice": "9999999999.99"}],
    })
    assert errs == {"items": ["Order total may not exceed 999999999999.99"]}


def test_order_total_at_column_limit_is_accepted():
    po = POCreate.model_validate({
        "supplierId": str(uuid.uuid4()),
        "items": [{"productId": str(uuid.uuid4()), "quantity": 100, "unitPrice": "9999999999.99"}],
    })
    assert po.items[0].unit_price == Decimal("9999999999.99")

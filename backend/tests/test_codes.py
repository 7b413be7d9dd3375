import re

import pytest

from app.services.codes import generate_code, generate_po_number, to_base36, generate_sku


@pytest.mark.parametrize("n, expected", [(0, "0"), (35, "z"), (36, "10"), (1295, "zz")])
def test_to_base36(n, expected):
    assert to_base36(n) == expected


def test_to_base36_rejects_negative():
    with pytest.raises(ValueError):
        to_base36(-1)


def test_generate_code_shape():
    code = generate_code("PRD", timestamp_ms=1_700_000_000_000)
    prefix, ts, suffix = code.split("-")
    assert prefix == "PRD"
    assert ts == to_base36(1_700_000_000_000).upper()
    assert re.fullmatch(r"[0-9A-Z]{3}", suffix)
    assert code == code.upper()


def test_generate_code_uppercases_prefix():
    assert generate_code("sup").startswith("SUP-")


def test_sku_uses_product_prefix():
    assert generate_sku().startswith("PRD-")


def test_codes_are_very_likely_distinct():
    codes = {generate_code("PRD") for _ in range(200)}
    # probabilistic: a handful of collisions would still pass
    assert len(codes) > 190


def test_po_number_is_decimal_millis():
    assert generate_po_number(timestamp_ms=1_700_000_000_123) == "PO-1700000000123"
    assert re.fullmatch(r"PO-\d{13,}", generate_po_number())

# backend/app/services/order_assembly.py
"""
Purchase order assembly: flattened form fields -> validated POCreate, and
the order total.

Form convention::

    supplierId, notes,
    items[0][productId], items[0][quantity], items[0][unitPrice],
    items[1][productId], ...

Every indexed key is collected; indices must run 0..n-1 without gaps.
Indices with leading zeros (``items[01][...]``) are not item keys.
"""
from __future__ import annotations
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Mapping

from pydantic import ValidationError

from app.core.errors import ValidationFailed
from app.schemas.common import MONEY_PLACES, field_errors
from app.schemas.purchase import POCreate, POItemIn

ITEM_KEY_RE = re.compile(r"^items\[(0|[1-9]\d*)\]\[(productId|quantity|unitPrice)\]$")


def items_from_form(form: Mapping[str, str]) -> List[Dict[str, str]]:
    rows: Dict[int, Dict[str, str]] = {}
    for key, value in form.items():
        m = ITEM_KEY_RE.match(key)
        if not m:
            continue
        rows.setdefault(int(m.group(1)), {})[m.group(2)] = value

    indices = sorted(rows)
    if indices != list(range(len(indices))):
        raise ValidationFailed({"items": ["Item indices must be contiguous starting at 0"]})
    return [rows[i] for i in indices]


def order_from_form(form: Mapping[str, str]) -> POCreate:
    candidate = {
        "supplierId": form.get("supplierId"),
        "notes": form.get("notes"),
        "items": items_from_form(form),
    }
    try:
        return POCreate.model_validate(candidate)
    except ValidationError as e:
        raise ValidationFailed(field_errors(e.errors()))


def line_total(quantity: int, unit_price: Decimal) -> Decimal:
    return (Decimal(quantity) * unit_price).quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def compute_total(items: Iterable[POItemIn]) -> Decimal:
    total = sum((Decimal(i.quantity) * i.unit_price for i in items), Decimal("0"))
    return total.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)

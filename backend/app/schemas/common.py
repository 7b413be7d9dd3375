# app/schemas/common.py
import uuid
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

MONEY_PLACES = Decimal("0.01")  # 2 places
MONEY_MAX = Decimal("9999999999.99")     # Numeric(12,2)
TOTAL_MAX = Decimal("999999999999.99")  # Numeric(14,2)

# Location prefixes FastAPI adds to request errors
_LOC_SOURCES = {"body", "query", "path", "form"}


class FormModel(BaseModel):
    """Input bundle: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


def to_money(val: Any) -> Decimal:
    try:
        d = val if isinstance(val, Decimal) else Decimal(str(val))
        return d.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        raise PydanticCustomError("decimal_parsing", "Input should be a valid decimal")


def blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


def uuid_str(v: Any, message: str) -> str:
    try:
        return str(uuid.UUID(str(v).strip()))
    except (ValueError, TypeError, AttributeError):
        raise PydanticCustomError("id_invalid", message)


def _loc_key(loc: Iterable[Any]) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _LOC_SOURCES:
        parts = parts[1:]
    return ".".join(parts) or "__root__"


def field_errors(errors: Iterable[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Flatten pydantic error dicts into {field: [message, ...]}.
    Nested locations are dotted, e.g. ``items.0.quantity``.
    """
    out: Dict[str, List[str]] = {}
    for err in errors:
        msg = str(err.get("msg", "Invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        out.setdefault(_loc_key(err.get("loc", ())), []).append(msg)
    return out

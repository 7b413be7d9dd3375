# backend/app/services/codes.py
"""
Human readable identifiers.

  SKU:       PRD-<base36 ms timestamp>-<3 random base36 chars>, upper-cased
  PO number: PO-<decimal ms timestamp>

Uniqueness is probabilistic and time ordered; nothing here checks the
database for collisions. Codes are generated once and stored verbatim.
"""
from __future__ import annotations
import secrets
import string
import time
from typing import Optional

from app.domain.constants import SKU_PREFIX, PO_NUMBER_PREFIX

BASE36_ALPHABET = string.digits + string.ascii_lowercase
SUFFIX_LEN = 3


def now_ms() -> int:
    return time.time_ns() // 1_000_000


def to_base36(n: int) -> str:
    if n < 0:
        raise ValueError("to_base36 expects a non-negative integer")
    if n == 0:
        return "0"
    out = []
    while n:
        n, rem = divmod(n, 36)
        out.append(BASE36_ALPHABET[rem])
    return "".join(reversed(out))


def random_suffix(length: int = SUFFIX_LEN) -> str:
    return "".join(secrets.choice(BASE36_ALPHABET) for _ in range(length))


def generate_code(prefix: str = SKU_PREFIX, timestamp_ms: Optional[int] = None) -> str:
    ts = now_ms() if timestamp_ms is None else timestamp_ms
    return f"{prefix}-{to_base36(ts)}-{random_suffix()}".upper()


def generate_sku() -> str:
    return generate_code(SKU_PREFIX)


def generate_po_number(timestamp_ms: Optional[int] = None) -> str:
    ts = now_ms() if timestamp_ms is None else timestamp_ms
    return f"{PO_NUMBER_PREFIX}-{ts}"

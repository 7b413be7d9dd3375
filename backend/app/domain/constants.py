# backend/app/domain/constants.py

"""
Single source for procurement constants shared by models, schemas and services.
"""

from typing import Final

PO_STATUS_DRAFT: Final[str] = "draft"
PO_STATUS_PENDING: Final[str] = "pending"
PO_STATUSES: Final[tuple] = ("draft", "pending", "approved", "rejected", "completed")

# Code prefixes
SKU_PREFIX: Final[str] = "PRD"
PO_NUMBER_PREFIX: Final[str] = "PO"

RECENT_ORDERS_LIMIT: Final[int] = 5

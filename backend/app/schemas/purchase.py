# app/schemas/purchase.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic_core import PydanticCustomError

from .common import FormModel, MONEY_MAX, TOTAL_MAX, blank_to_none, to_money, uuid_str

StatusLiteral = Literal["draft", "pending", "approved", "rejected", "completed"]


class POItemIn(FormModel):
    product_id: str
    quantity: int = Field(ge=1, le=1_000_000)
    unit_price: Decimal = Field(ge=0, le=MONEY_MAX, decimal_places=2)

    @field_validator("product_id", mode="before")
    @classmethod
    def _product_id(cls, v):
        return uuid_str(v, "Please select a product")

    @field_validator("unit_price")
    @classmethod
    def _price_money(cls, v: Decimal) -> Decimal:
        return to_money(v)


class POCreate(FormModel):
    supplier_id: str
    notes: Optional[str] = Field(None, max_length=2000)
    items: List[POItemIn]

    @field_validator("supplier_id", mode="before")
    @classmethod
    def _supplier_id(cls, v):
        return uuid_str(v, "Please select a supplier")

    @field_validator("notes", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)

    @field_validator("items")
    @classmethod
    def _items_fit(cls, v: List[POItemIn]) -> List[POItemIn]:
        if not v:
            raise PydanticCustomError("items_empty", "At least one item is required")
        # every stored amount has to fit its Numeric(14,2) column
        total = sum((Decimal(i.quantity) * i.unit_price for i in v), Decimal("0"))
        if total > TOTAL_MAX:
            raise PydanticCustomError(
                "items_total_too_large",
                "Order total may not exceed {limit}",
                {"limit": str(TOTAL_MAX)},
            )
        return v


class POItemRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    po_id: str
    product_id: str
    product_name: Optional[str] = None
    product_sku: Optional[str] = None
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    @field_serializer("unit_price", "total_price", when_used="json")
    def _ser_money(self, v: Decimal):
        return float(v)


class PORead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    po_number: str
    supplier_id: str
    supplier_name: Optional[str] = None
    status: StatusLiteral
    total_amount: Decimal
    notes: Optional[str] = None
    created_by: str
    created_at: datetime
    updated_at: datetime

    @field_serializer("total_amount", when_used="json")
    def _ser_total(self, v: Decimal):
        return float(v)


class PODetail(PORead):
    items: List[POItemRead] = []

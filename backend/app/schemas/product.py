# app/schemas/product.py
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .common import FormModel, MONEY_MAX, blank_to_none, to_money


class ProductCreate(FormModel):
    name: str = Field(min_length=2, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    unit_of_measure: str = Field(min_length=1, max_length=20)
    cost: Decimal = Field(ge=0, le=MONEY_MAX, decimal_places=2)

    @field_validator("description", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)

    @field_validator("cost")
    @classmethod
    def _cost_money(cls, v: Decimal) -> Decimal:
        return to_money(v)


class ProductRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    sku: str
    unit_of_measure: str
    cost: Decimal
    quantity_on_hand: int
    created_at: datetime
    updated_at: datetime

    # float in JSON keeps clients simple
    @field_serializer("cost", when_used="json")
    def _ser_cost(self, v: Decimal):
        return float(v)

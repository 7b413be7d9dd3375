# app/schemas/supplier.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from .common import FormModel, blank_to_none


class SupplierCreate(FormModel):
    name: str = Field(min_length=2, max_length=200)
    contact_person: Optional[str] = Field(None, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = Field(None, max_length=500)

    # Empty form inputs mean "not given"
    @field_validator("contact_person", "email", "phone", "address", mode="before")
    @classmethod
    def _blank(cls, v):
        return blank_to_none(v)


class SupplierRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: datetime
    updated_at: datetime

import re
from typing import List, Optional

from pydantic import Field, field_validator

from app.domain.models import CamelModel, Order, OrderStatus

PHONE_PATTERN = re.compile(r"^[0-9+\-\s()]+$")


class OrderCreate(CamelModel):
    """
    Body of POST /api/orders.
    Unknown keys (including any 'status') are ignored; new orders always start as pending.
    """

    customer_name: str
    phone: str
    medicine: str

    @field_validator("customer_name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        if len(value) < 10:
            raise ValueError("Phone number must be at least 10 digits")
        if not PHONE_PATTERN.match(value):
            raise ValueError("Please enter a valid phone number")
        return value

    @field_validator("medicine")
    @classmethod
    def _check_medicine(cls, value: str) -> str:
        if len(value) < 3:
            raise ValueError("Medicine details must be at least 3 characters")
        return value


class OrderUpdate(CamelModel):
    """
    Body of PATCH /api/orders/{id}. Every field is optional, but an explicit null is rejected.
    Only the fields the caller actually sent are applied (see `changes()`).
    """

    customer_name: Optional[str] = Field(default=None, min_length=2)
    phone: Optional[str] = Field(default=None, min_length=10)
    medicine: Optional[str] = Field(default=None, min_length=3)
    status: Optional[OrderStatus] = None

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value):
        # Defaults are not validated, so this only fires for an explicit null
        if value is None:
            raise ValueError("Field may be omitted but not null")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class OrderPage(CamelModel):
    orders: List[Order]
    total: int

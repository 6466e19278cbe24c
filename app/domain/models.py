from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Order(CamelModel):
    id: str
    customer_name: str
    phone: str
    medicine: str
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

"""Order schemas."""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from salestracker.utils import to_naive_utc


class Order(BaseModel):
    """Order record as stored and returned by a record store.

    A price of zero means "not set"; the order service fills it from the
    item's sale price on creation.
    """
    id: Optional[int] = None
    customer_name: str = ""
    item_id: int
    sell_date: datetime
    price: Decimal = Decimal("0")
    quantity: int = 1
    has_received_payment: bool = False
    payment_date: Optional[datetime] = None
    has_delivered: bool = False
    delivery_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator(
        "sell_date", "payment_date", "delivery_date", "created_at", "modified_at"
    )
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)

    @property
    def total(self) -> Decimal:
        return self.price * self.quantity


class OrderCreate(BaseModel):
    """Schema for creating an order."""
    customer_name: str
    item_id: int
    sell_date: Optional[datetime] = None  # Defaults to now
    price: Optional[Decimal] = Field(None, ge=0)  # Defaults to the item's sale price
    quantity: int = 1


class OrderUpdate(BaseModel):
    """Schema for updating an order.

    Changing ``item_id`` or ``quantity`` does not move any allocation.
    """
    customer_name: Optional[str] = None
    item_id: Optional[int] = None
    sell_date: Optional[datetime] = None
    price: Optional[Decimal] = Field(None, ge=0)
    quantity: Optional[int] = None

    @field_validator("customer_name", "item_id", "sell_date", "price", "quantity")
    @classmethod
    def not_null(cls, value, info):
        # Omit a field to leave it unchanged; it cannot be cleared
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class OrderResponse(BaseModel):
    """Response schema for orders."""
    id: int
    customer_name: str
    item_id: int
    sell_date: datetime
    price: Decimal
    quantity: int
    total: Decimal
    has_received_payment: bool
    payment_date: Optional[datetime] = None
    has_delivered: bool
    delivery_date: Optional[datetime] = None
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None

    class Config:
        from_attributes = True

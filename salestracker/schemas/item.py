"""Item schemas for records and request/response validation."""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator

from salestracker.utils import to_naive_utc


class Item(BaseModel):
    """Item record as stored and returned by a record store.

    ``current_quantity`` is what is on hand; ``allocated_quantity`` is what
    undelivered orders have reserved. Availability is derived and goes
    negative when the item is oversold.
    """
    id: Optional[int] = None
    name: str = ""
    description: Optional[str] = None
    sale_price: Optional[Decimal] = None
    cost: Decimal = Decimal("0")
    current_quantity: int = 0
    allocated_quantity: int = 0
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @field_validator("created_at", "modified_at")
    @classmethod
    def normalize_dates(cls, value):
        return to_naive_utc(value)

    @property
    def available_quantity(self) -> int:
        return self.current_quantity - self.allocated_quantity

    @property
    def is_backordered(self) -> bool:
        return self.available_quantity < 0

    @property
    def quantity_needed(self) -> int:
        """Units missing to fill every allocation."""
        return max(0, self.allocated_quantity - self.current_quantity)


class ItemCreate(BaseModel):
    """Schema for creating an item."""
    name: str
    description: Optional[str] = None
    sale_price: Optional[Decimal] = Field(None, ge=0)
    cost: Decimal
    current_quantity: int = Field(default=0, ge=0)


class ItemUpdate(BaseModel):
    """Schema for updating an item.

    Stock levels are changed through the inventory endpoints and orders.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    sale_price: Optional[Decimal] = Field(None, ge=0)
    cost: Optional[Decimal] = None

    @field_validator("name", "cost")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class ItemResponse(BaseModel):
    """Schema for item response."""
    id: int
    name: str
    description: Optional[str] = None
    sale_price: Optional[Decimal] = None
    cost: Decimal
    current_quantity: int
    allocated_quantity: int
    available_quantity: int
    is_backordered: bool
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    
    class Config:
        from_attributes = True

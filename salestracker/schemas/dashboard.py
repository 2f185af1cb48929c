"""Dashboard schemas."""
from decimal import Decimal
from pydantic import BaseModel

from salestracker.schemas.item import ItemResponse


class DashboardSummaryResponse(BaseModel):
    """Headline dashboard numbers."""
    current_month_sales: Decimal
    previous_month_sales: Decimal
    sales_percentage_change: Decimal
    net_profit: Decimal
    current_month_net_profit: Decimal
    previous_month_net_profit: Decimal
    profit_percentage_change: Decimal
    orders_this_month: int
    pending_deliveries_count: int
    backordered_items_count: int

    class Config:
        from_attributes = True


class TopSellingItemResponse(BaseModel):
    item: ItemResponse
    total_quantity: int
    total_revenue: Decimal

    class Config:
        from_attributes = True


class BackorderedItemResponse(BaseModel):
    item: ItemResponse
    quantity_needed: int

    class Config:
        from_attributes = True


class InventorySummaryResponse(BaseModel):
    total_items: int
    low_stock_count: int
    backordered_count: int

    class Config:
        from_attributes = True

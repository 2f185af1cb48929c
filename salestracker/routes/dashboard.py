"""Dashboard routes."""
from decimal import Decimal
from typing import Dict, List

from fastapi import APIRouter, Depends, Query

from salestracker.config import settings
from salestracker.dependencies import get_dashboard_service
from salestracker.schemas.dashboard import (
    BackorderedItemResponse,
    DashboardSummaryResponse,
    InventorySummaryResponse,
    TopSellingItemResponse,
)
from salestracker.schemas.item import ItemResponse
from salestracker.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/summary", response_model=DashboardSummaryResponse)
async def get_summary(service: DashboardService = Depends(get_dashboard_service)):
    """Revenue, profit and operational counts for the current month."""
    return DashboardSummaryResponse.model_validate(await service.get_dashboard_summary())


@router.get("/monthly-sales", response_model=Dict[str, Decimal])
async def get_monthly_sales(
    months: int = Query(settings.MONTHLY_SALES_MONTHS, ge=1, description="Number of trailing months"),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Revenue per month, oldest first, keyed by YYYY-MM."""
    return await service.get_monthly_sales(months)


@router.get("/daily-sales", response_model=Dict[str, Decimal])
async def get_daily_sales(service: DashboardService = Depends(get_dashboard_service)):
    """Revenue per day of the current month up to today, keyed by YYYY-MM-DD."""
    return await service.get_daily_sales_for_current_month()


@router.get("/top-selling", response_model=List[TopSellingItemResponse])
async def get_top_selling(
    limit: int = Query(settings.TOP_SELLING_LIMIT, ge=1, description="Number of items"),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Items ranked by revenue."""
    return [
        TopSellingItemResponse(
            item=ItemResponse.model_validate(entry.item),
            total_quantity=entry.total_quantity,
            total_revenue=entry.total_revenue,
        )
        for entry in await service.get_top_selling_items(limit)
    ]


@router.get("/backordered", response_model=List[BackorderedItemResponse])
async def get_backordered(service: DashboardService = Depends(get_dashboard_service)):
    """Backordered items with the quantity needed to fill their orders."""
    return [
        BackorderedItemResponse(
            item=ItemResponse.model_validate(entry.item),
            quantity_needed=entry.quantity_needed,
        )
        for entry in await service.get_backordered_items()
    ]


@router.get("/inventory-summary", response_model=InventorySummaryResponse)
async def get_inventory_summary(
    threshold: int = Query(settings.LOW_STOCK_THRESHOLD, description="Low stock threshold"),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Item count, low stock count and backorder count."""
    return InventorySummaryResponse.model_validate(await service.get_inventory_summary(threshold))

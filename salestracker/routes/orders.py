"""Order routes."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query

from salestracker.dependencies import get_order_service
from salestracker.schemas.order import Order, OrderCreate, OrderResponse, OrderUpdate
from salestracker.services.order_service import OrderService
from salestracker.utils import utcnow

router = APIRouter(prefix="/orders", tags=["Orders"])


def _responses(orders: List[Order]) -> List[OrderResponse]:
    return [OrderResponse.model_validate(order) for order in orders]


@router.get("/", response_model=List[OrderResponse])
async def list_orders(
    customer: Optional[str] = Query(None, description="Filter by customer name"),
    start: Optional[datetime] = Query(None, description="Earliest sell date (inclusive)"),
    end: Optional[datetime] = Query(None, description="Latest sell date (inclusive)"),
    service: OrderService = Depends(get_order_service)
):
    """List orders, optionally filtered by customer and sell date."""
    in_range = None
    if start or end:
        in_range = await service.get_orders_by_date_range(start or datetime.min, end or datetime.max)

    if customer:
        orders = await service.search_by_customer(customer)
        if in_range is not None:
            range_ids = {o.id for o in in_range}
            orders = [o for o in orders if o.id in range_ids]
    elif in_range is not None:
        orders = in_range
    else:
        orders = await service.get_all_orders()

    return _responses(sorted(orders, key=lambda o: o.sell_date, reverse=True))


@router.get("/pending-deliveries", response_model=List[OrderResponse])
async def list_pending_deliveries(service: OrderService = Depends(get_order_service)):
    """Orders sold but not delivered yet."""
    return _responses(await service.get_pending_deliveries())


@router.get("/unpaid", response_model=List[OrderResponse])
async def list_unpaid_orders(service: OrderService = Depends(get_order_service)):
    """Orders still waiting for payment."""
    return _responses(await service.get_unpaid_orders())


@router.post("/", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service)
):
    """Create a new order and allocate stock for it."""
    data = order_data.model_dump(exclude_none=True)
    data.setdefault("sell_date", utcnow())
    order_id = await service.create_order(Order(**data))
    return OrderResponse.model_validate(await service.get_order(order_id))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """Get a specific order."""
    order = await service.get_order(order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found"
        )
    return OrderResponse.model_validate(order)


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
    order_id: int,
    order_update: OrderUpdate,
    service: OrderService = Depends(get_order_service)
):
    """Update an order. Stock allocation is not adjusted."""
    order = await service.get_order(order_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Order not found"
        )

    # Rebuild so the date validators see the new values
    update_data = order_update.model_dump(exclude_unset=True)
    order = Order.model_validate({**order.model_dump(), **update_data})

    await service.update_order(order)
    return OrderResponse.model_validate(await service.get_order(order_id))


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """Delete an order, releasing its stock if it was not delivered."""
    await service.delete_order(order_id)
    return None


@router.post("/{order_id}/deliver", response_model=OrderResponse)
async def deliver_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """Mark order as delivered and take its quantity out of stock."""
    return OrderResponse.model_validate(await service.mark_as_delivered(order_id))


@router.post("/{order_id}/pay", response_model=OrderResponse)
async def pay_order(
    order_id: int,
    service: OrderService = Depends(get_order_service)
):
    """Mark order as paid."""
    return OrderResponse.model_validate(await service.mark_as_paid(order_id))

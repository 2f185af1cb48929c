"""Order service - order lifecycle and the inventory allocation it drives.

While an order is undelivered its quantity is held in the item's
``allocated_quantity``. Delivery consumes the allocation and the stock;
deleting an undelivered order releases the allocation.

Every operation is a sequence of independent store calls. If the process
dies between the order write and the item write the two fall out of step;
nothing here rolls back.
"""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from salestracker.errors import NotFoundError, ValidationError
from salestracker.schemas.item import Item
from salestracker.schemas.order import Order
from salestracker.stores.base import RecordStore
from salestracker.utils import to_naive_utc, utcnow

logger = logging.getLogger(__name__)


class OrderService:
    """Creates, updates and deletes orders and moves their stock."""

    def __init__(
        self,
        order_store: RecordStore[Order],
        item_store: RecordStore[Item],
        clock: Callable[[], datetime] = utcnow,
    ):
        self.order_store = order_store
        self.item_store = item_store
        self.clock = clock

    async def get_all_orders(self) -> List[Order]:
        return await self.order_store.get_all()

    async def get_order(self, order_id: int) -> Optional[Order]:
        return await self.order_store.get_by_id(order_id)

    async def _require_order(self, order_id: int) -> Order:
        order = await self.order_store.get_by_id(order_id)
        if order is None:
            raise NotFoundError("Order", order_id)
        return order

    async def _require_item(self, item_id: int) -> Item:
        item = await self.item_store.get_by_id(item_id)
        if item is None:
            raise NotFoundError("Item", item_id)
        return item

    async def create_order(self, order: Order) -> int:
        """Store a new order and allocate its quantity on the item.

        No availability check is made: overselling is allowed and shows up
        as a backorder on the item.
        """
        if not order.customer_name or not order.customer_name.strip():
            raise ValidationError("Customer name is required.", field="customer_name")
        if order.quantity <= 0:
            raise ValidationError("Quantity must be greater than zero.", field="quantity")

        item = await self._require_item(order.item_id)

        now = self.clock()
        updates = {"created_at": now, "modified_at": now}
        # Only the sale price is used as a default, never the cost
        if (order.price is None or order.price <= 0) and item.sale_price is not None:
            updates["price"] = item.sale_price
        order = order.model_copy(update=updates)

        order_id = await self.order_store.add(order)

        item.allocated_quantity += order.quantity
        item.modified_at = now
        await self.item_store.update(item)

        logger.info(
            "Created order %s: %d x item %s for %s",
            order_id, order.quantity, item.id, order.customer_name
        )
        return order_id

    async def update_order(self, order: Order) -> None:
        """Persist an edited order as-is.

        Allocation is not reconciled: if ``quantity`` or ``item_id`` changed
        the caller has to adjust the items.
        """
        order.modified_at = self.clock()
        await self.order_store.update(order)
        logger.debug("Updated order %s without touching allocation", order.id)

    async def mark_as_delivered(self, order_id: int) -> Order:
        """Deliver an order, consuming its allocation and the stock."""
        order = await self._require_order(order_id)
        item = await self._require_item(order.item_id)

        now = self.clock()
        order.has_delivered = True
        if order.delivery_date is None:
            order.delivery_date = now
        order.modified_at = now
        await self.order_store.update(order)

        if item.current_quantity < order.quantity or item.allocated_quantity < order.quantity:
            logger.warning(
                "Delivering order %s: item %s stock floored at zero "
                "(current=%d, allocated=%d, order quantity=%d)",
                order_id, item.id, item.current_quantity, item.allocated_quantity, order.quantity
            )
        item.allocated_quantity = max(0, item.allocated_quantity - order.quantity)
        item.current_quantity = max(0, item.current_quantity - order.quantity)
        item.modified_at = now
        await self.item_store.update(item)

        logger.info("Order %s delivered", order_id)
        return order

    async def mark_as_paid(self, order_id: int) -> Order:
        order = await self._require_order(order_id)

        now = self.clock()
        order.has_received_payment = True
        if order.payment_date is None:
            order.payment_date = now
        order.modified_at = now
        await self.order_store.update(order)

        logger.info("Order %s paid", order_id)
        return order

    async def delete_order(self, order_id: int) -> None:
        """Delete an order, releasing its allocation if it was never delivered.

        Deleting a missing order is not an error.
        """
        order = await self.order_store.get_by_id(order_id)
        if order is None:
            logger.debug("Order %s already gone", order_id)
            return

        item = await self.item_store.get_by_id(order.item_id)
        if item is not None and not order.has_delivered:
            item.allocated_quantity = max(0, item.allocated_quantity - order.quantity)
            item.modified_at = self.clock()
            await self.item_store.update(item)

        await self.order_store.delete(order_id)
        logger.info("Deleted order %s", order_id)

    async def search_by_customer(self, customer_name: str) -> List[Order]:
        term = customer_name.lower()
        return await self.order_store.query(lambda o: term in o.customer_name.lower())

    async def get_orders_by_date_range(self, start_date: datetime, end_date: datetime) -> List[Order]:
        """Orders sold between ``start_date`` and ``end_date``, both inclusive."""
        start_date, end_date = to_naive_utc(start_date), to_naive_utc(end_date)
        return await self.order_store.query(lambda o: start_date <= o.sell_date <= end_date)

    async def get_pending_deliveries(self) -> List[Order]:
        """Undelivered orders whose sell date has arrived."""
        now = self.clock()
        return await self.order_store.query(lambda o: not o.has_delivered and o.sell_date <= now)

    async def get_unpaid_orders(self) -> List[Order]:
        return await self.order_store.query(lambda o: not o.has_received_payment)

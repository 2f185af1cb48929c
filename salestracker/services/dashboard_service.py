"""Dashboard service - revenue, profit and stock analytics.

Everything here is read-only and works on the full order and item sets.
Month windows compare calendar dates (UTC), so an order sold at any time on
the last day of a month belongs to that month.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable, Dict, Iterable, List

from salestracker.schemas.item import Item
from salestracker.schemas.order import Order
from salestracker.stores.base import RecordStore
from salestracker.utils import add_months, month_bounds, utcnow

ZERO = Decimal("0")


@dataclass
class TopSellingItem:
    item: Item
    total_quantity: int
    total_revenue: Decimal


@dataclass
class BackorderedItem:
    item: Item
    quantity_needed: int


@dataclass
class InventorySummary:
    total_items: int
    low_stock_count: int
    backordered_count: int


@dataclass
class DashboardSummary:
    """Headline numbers shown at the top of the dashboard."""
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


def percentage_change(current: Decimal, previous: Decimal) -> Decimal:
    """Relative change from ``previous`` to ``current`` in percent.

    A zero baseline gives 100 when there is growth and 0 otherwise.
    """
    if previous == 0:
        return Decimal(100) if current > 0 else ZERO
    return (current - previous) / previous * 100


def total_revenue(orders: Iterable[Order]) -> Decimal:
    return sum((o.price * o.quantity for o in orders), ZERO)


def total_profit(orders: Iterable[Order], items_by_id: Dict[int, Item]) -> Decimal:
    """Sum of (price - cost) * quantity; orders of deleted items count as 0."""
    profit = ZERO
    for order in orders:
        item = items_by_id.get(order.item_id)
        if item is not None:
            profit += (order.price - item.cost) * order.quantity
    return profit


def _sold_between(first: date, last: date) -> Callable[[Order], bool]:
    return lambda o: first <= o.sell_date.date() <= last


class DashboardService:
    """Aggregations behind the dashboard."""

    def __init__(
        self,
        order_store: RecordStore[Order],
        item_store: RecordStore[Item],
        clock: Callable[[], datetime] = utcnow,
    ):
        self.order_store = order_store
        self.item_store = item_store
        self.clock = clock

    def _current_month(self) -> tuple[date, date]:
        return month_bounds(self.clock().date())

    def _previous_month(self) -> tuple[date, date]:
        return month_bounds(add_months(self.clock().date(), -1))

    async def _items_by_id(self) -> Dict[int, Item]:
        return {item.id: item for item in await self.item_store.get_all()}

    async def _orders_in(self, bounds: tuple[date, date]) -> List[Order]:
        return await self.order_store.query(_sold_between(*bounds))

    async def get_current_month_sales(self) -> Decimal:
        return total_revenue(await self._orders_in(self._current_month()))

    async def get_previous_month_sales(self) -> Decimal:
        return total_revenue(await self._orders_in(self._previous_month()))

    async def get_monthly_sales_percentage_change(self) -> Decimal:
        current = await self.get_current_month_sales()
        previous = await self.get_previous_month_sales()
        return percentage_change(current, previous)

    async def get_net_profit(self) -> Decimal:
        """All-time profit (sales revenue minus cost of goods sold)."""
        orders = await self.order_store.get_all()
        return total_profit(orders, await self._items_by_id())

    async def get_current_month_net_profit(self) -> Decimal:
        orders = await self._orders_in(self._current_month())
        return total_profit(orders, await self._items_by_id())

    async def get_previous_month_net_profit(self) -> Decimal:
        orders = await self._orders_in(self._previous_month())
        return total_profit(orders, await self._items_by_id())

    async def get_monthly_profit_percentage_change(self) -> Decimal:
        current = await self.get_current_month_net_profit()
        previous = await self.get_previous_month_net_profit()
        return percentage_change(current, previous)

    async def get_pending_deliveries_count(self) -> int:
        now = self.clock()
        orders = await self.order_store.query(lambda o: not o.has_delivered and o.sell_date <= now)
        return len(orders)

    async def get_orders_count_for_current_month(self) -> int:
        return len(await self._orders_in(self._current_month()))

    async def get_backordered_items_count(self) -> int:
        items = await self.item_store.query(lambda i: i.allocated_quantity > i.current_quantity)
        return len(items)

    async def get_backordered_items(self) -> List[BackorderedItem]:
        items = await self.item_store.query(lambda i: i.allocated_quantity > i.current_quantity)
        return [
            BackorderedItem(item=i, quantity_needed=i.allocated_quantity - i.current_quantity)
            for i in items
        ]

    async def get_monthly_sales(self, month_count: int = 12) -> Dict[str, Decimal]:
        """Revenue per month for the trailing ``month_count`` months, oldest first.

        Months without sales are included with 0.
        """
        orders = await self.order_store.get_all()
        today = self.clock().date()

        result: Dict[str, Decimal] = {}
        for offset in range(month_count - 1, -1, -1):
            first, last = month_bounds(add_months(today, -offset))
            in_month = _sold_between(first, last)
            result[first.strftime("%Y-%m")] = total_revenue(o for o in orders if in_month(o))
        return result

    async def get_daily_sales_for_current_month(self) -> Dict[str, Decimal]:
        """Revenue per day from the 1st through today, days without sales included."""
        first, last = self._current_month()
        orders = await self._orders_in((first, last))
        end = min(self.clock().date(), last)

        result: Dict[str, Decimal] = {}
        day = first
        while day <= end:
            result[day.isoformat()] = total_revenue(o for o in orders if o.sell_date.date() == day)
            day += timedelta(days=1)
        return result

    async def get_top_selling_items(self, top_n: int = 10) -> List[TopSellingItem]:
        """Best sellers by revenue.

        Orders of deleted items are dropped. Equal revenues keep the order in
        which the items were first seen.
        """
        orders = await self.order_store.get_all()
        items_by_id = await self._items_by_id()

        quantities: Dict[int, int] = {}
        revenues: Dict[int, Decimal] = {}
        for order in orders:
            quantities[order.item_id] = quantities.get(order.item_id, 0) + order.quantity
            revenues[order.item_id] = revenues.get(order.item_id, ZERO) + order.price * order.quantity

        ranked = [
            TopSellingItem(
                item=items_by_id[item_id],
                total_quantity=quantities[item_id],
                total_revenue=revenues[item_id],
            )
            for item_id in revenues
            if item_id in items_by_id
        ]
        ranked.sort(key=lambda entry: entry.total_revenue, reverse=True)
        return ranked[:top_n]

    async def get_inventory_summary(self, low_stock_threshold: int = 10) -> InventorySummary:
        items = await self.item_store.get_all()
        return InventorySummary(
            total_items=len(items),
            low_stock_count=sum(1 for i in items if i.available_quantity < low_stock_threshold),
            backordered_count=sum(1 for i in items if i.is_backordered),
        )

    async def get_dashboard_summary(self) -> DashboardSummary:
        current_sales = await self.get_current_month_sales()
        previous_sales = await self.get_previous_month_sales()
        current_profit = await self.get_current_month_net_profit()
        previous_profit = await self.get_previous_month_net_profit()
        return DashboardSummary(
            current_month_sales=current_sales,
            previous_month_sales=previous_sales,
            sales_percentage_change=percentage_change(current_sales, previous_sales),
            net_profit=await self.get_net_profit(),
            current_month_net_profit=current_profit,
            previous_month_net_profit=previous_profit,
            profit_percentage_change=percentage_change(current_profit, previous_profit),
            orders_this_month=await self.get_orders_count_for_current_month(),
            pending_deliveries_count=await self.get_pending_deliveries_count(),
            backordered_items_count=await self.get_backordered_items_count(),
        )

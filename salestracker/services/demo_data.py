"""Demo data - seeded sample items and orders for trying the app out."""
import calendar
import logging
import random
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, List

from salestracker.schemas.item import Item
from salestracker.schemas.order import Order
from salestracker.services.item_service import ItemService
from salestracker.services.order_service import OrderService
from salestracker.stores.flags import FlagStore
from salestracker.utils import add_months, utcnow

logger = logging.getLogger(__name__)

DEMO_DATA_FLAG_KEY = "salestracker_demo_data_loaded"

PRODUCT_NAMES = [
    "Wireless Headphones", "USB-C Cable", "Portable Charger", "Bluetooth Speaker",
    "Phone Stand", "Screen Protector", "USB Hub", "Laptop Stand",
    "Keyboard", "Mouse Pad", "HDMI Cable", "Memory Card",
    "Case/Cover", "Tempered Glass", "Fast Charger", "Power Bank",
    "Webcam", "Microphone", "Phone Pop Socket", "Desk Lamp",
    "Cable Organizer", "Phone Ringer", "Smart Watch Band", "Ring Light",
]

FIRST_NAMES = [
    "John", "Sarah", "Michael", "Emma", "David", "Lisa", "James", "Mary",
    "Robert", "Jennifer", "William", "Patricia", "Richard", "Barbara",
    "Joseph", "Susan", "Thomas", "Jessica", "Christopher", "Karen",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez",
    "Wilson", "Anderson", "Thomas", "Taylor", "Moore", "Jackson", "Martin",
]

CENT = Decimal("0.01")


class DemoDataFlagService:
    """Remembers whether demo data has been loaded, using any flag store."""

    def __init__(self, flag_store: FlagStore):
        self.flag_store = flag_store

    async def is_demo_data_loaded(self) -> bool:
        return await self.flag_store.get(DEMO_DATA_FLAG_KEY)

    async def set_demo_data_loaded(self) -> None:
        await self.flag_store.set(DEMO_DATA_FLAG_KEY, True)

    async def clear_demo_data_flag(self) -> None:
        await self.flag_store.set(DEMO_DATA_FLAG_KEY, False)


class DemoDataService:
    """Creates demo items and orders through the regular services.

    Going through the services keeps allocations consistent with the
    generated orders. The fixed seed makes the data reproducible for a given
    day.
    """

    def __init__(
        self,
        item_service: ItemService,
        order_service: OrderService,
        clock: Callable[[], datetime] = utcnow,
        seed: int = 42,
    ):
        self.item_service = item_service
        self.order_service = order_service
        self.clock = clock
        self.seed = seed

    async def create_demo_data(self) -> None:
        rng = random.Random(self.seed)
        items = await self._create_items(rng)
        await self._create_orders(items, rng)
        logger.info("Demo data created: %d items", len(items))

    async def clear_all_data(self) -> None:
        """Delete every order, then every item."""
        for order in await self.order_service.get_all_orders():
            await self.order_service.delete_order(order.id)
        for item in await self.item_service.get_all_items():
            await self.item_service.delete_item(item.id)
        logger.info("All items and orders deleted")

    async def _create_items(self, rng: random.Random) -> List[Item]:
        items = []
        for name in PRODUCT_NAMES:
            cost = Decimal(str(rng.uniform(10, 60))).quantize(CENT)
            sale_price = (cost + cost * Decimal(str(rng.random())) * Decimal("1.5")).quantize(CENT)
            item = Item(
                name=name,
                description=f"High-quality {name.lower()}",
                cost=cost,
                sale_price=sale_price,
                current_quantity=rng.randint(0, 99),
            )
            item_id = await self.item_service.create_item(item)
            items.append(item.model_copy(update={"id": item_id}))
        return items

    async def _create_orders(self, items: List[Item], rng: random.Random) -> None:
        today = self.clock()
        current_month_start = today.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        previous = add_months(current_month_start.date(), -1)
        previous_month_start = current_month_start.replace(year=previous.year, month=previous.month)

        for _ in range(15):
            sell_date = self._random_day_in_month(current_month_start, rng)
            await self._create_order(rng.choice(items), rng, sell_date, paid=rng.random() > 0.2)

        for _ in range(10):
            sell_date = self._random_day_in_month(previous_month_start, rng)
            await self._create_order(rng.choice(items), rng, sell_date, paid=True)

        # Paid but still waiting for delivery
        for _ in range(5):
            sell_date = current_month_start + timedelta(days=rng.randint(1, 9))
            order = self._random_order(rng.choice(items), rng, sell_date)
            order_id = await self.order_service.create_order(order)
            await self.order_service.mark_as_paid(order_id)

        # Oversell the five lowest-stocked items
        for item in sorted(items, key=lambda i: i.current_quantity)[:5]:
            order = self._random_order(item, rng, today - timedelta(days=rng.randint(1, 9)))
            order.quantity = item.current_quantity + rng.randint(5, 40)
            await self.order_service.create_order(order)

    async def _create_order(self, item: Item, rng: random.Random, sell_date: datetime, paid: bool) -> None:
        order = self._random_order(item, rng, sell_date)
        delivered = False
        if paid:
            order.payment_date = sell_date + timedelta(days=rng.randint(1, 6))
            delivered = rng.random() > 0.1
            if delivered:
                order.delivery_date = order.payment_date + timedelta(days=rng.randint(1, 4))

        order_id = await self.order_service.create_order(order)
        if paid:
            await self.order_service.mark_as_paid(order_id)
        if delivered:
            await self.order_service.mark_as_delivered(order_id)

    @staticmethod
    def _random_day_in_month(month_start: datetime, rng: random.Random) -> datetime:
        days = calendar.monthrange(month_start.year, month_start.month)[1]
        return month_start + timedelta(days=rng.randint(1, days) - 1)

    @staticmethod
    def _random_order(item: Item, rng: random.Random, sell_date: datetime) -> Order:
        return Order(
            customer_name=f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}",
            item_id=item.id,
            sell_date=sell_date,
            price=item.sale_price or item.cost,
            quantity=rng.randint(1, 9),
        )


async def load_demo_data(demo_service: DemoDataService, flag_service: DemoDataFlagService) -> bool:
    """Create demo data unless it was loaded before. Returns True if created."""
    if await flag_service.is_demo_data_loaded():
        logger.info("Demo data already loaded, skipping")
        return False
    await demo_service.create_demo_data()
    await flag_service.set_demo_data_loaded()
    return True

"""Item service - validates items and adjusts their stock levels."""
import logging
from datetime import datetime
from typing import Callable, List, Optional

from salestracker.errors import InsufficientStockError, NotFoundError, ValidationError
from salestracker.schemas.item import Item
from salestracker.stores.base import RecordStore
from salestracker.utils import utcnow

logger = logging.getLogger(__name__)


def _validate_item(item: Item) -> None:
    if not item.name or not item.name.strip():
        raise ValidationError("Item name is required.", field="name")
    if item.cost is None or item.cost <= 0:
        raise ValidationError("Item cost must be greater than zero.", field="cost")


class ItemService:
    """Item management independent of orders."""

    def __init__(self, item_store: RecordStore[Item], clock: Callable[[], datetime] = utcnow):
        self.item_store = item_store
        self.clock = clock

    async def get_all_items(self) -> List[Item]:
        return await self.item_store.get_all()

    async def get_item(self, item_id: int) -> Optional[Item]:
        return await self.item_store.get_by_id(item_id)

    async def _require_item(self, item_id: int) -> Item:
        item = await self.item_store.get_by_id(item_id)
        if item is None:
            raise NotFoundError("Item", item_id)
        return item

    async def create_item(self, item: Item) -> int:
        """Validate and store a new item, returning its ID."""
        _validate_item(item)

        now = self.clock()
        item = item.model_copy(update={"created_at": now, "modified_at": now})
        item_id = await self.item_store.add(item)
        logger.info("Created item %s (%s)", item_id, item.name)
        return item_id

    async def update_item(self, item: Item) -> None:
        _validate_item(item)

        item.modified_at = self.clock()
        await self.item_store.update(item)

    async def delete_item(self, item_id: int) -> None:
        """Delete an item. Orders referencing it are left in place."""
        await self.item_store.delete(item_id)
        logger.info("Deleted item %s", item_id)

    async def search_items(self, search_term: str) -> List[Item]:
        """Case-insensitive substring match on name, description or ID."""
        term = search_term.lower()
        return await self.item_store.query(
            lambda i: term in i.name.lower()
            or (i.description is not None and term in i.description.lower())
            or term in str(i.id)
        )

    async def get_low_stock_items(self, threshold: int = 10) -> List[Item]:
        """Items whose available quantity is below ``threshold``."""
        return await self.item_store.query(lambda i: i.available_quantity < threshold)

    async def get_backordered_items(self) -> List[Item]:
        return await self.item_store.query(lambda i: i.allocated_quantity > i.current_quantity)

    async def add_inventory(self, item_id: int, quantity: int) -> Item:
        """Receive stock."""
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than zero.", field="quantity")

        item = await self._require_item(item_id)
        item.current_quantity += quantity
        item.modified_at = self.clock()
        await self.item_store.update(item)
        logger.info("Added %d units to item %s (now %d)", quantity, item_id, item.current_quantity)
        return item

    async def remove_inventory(self, item_id: int, quantity: int) -> Item:
        """Manual stock removal. Never drives stock below zero."""
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than zero.", field="quantity")

        item = await self._require_item(item_id)
        if item.current_quantity < quantity:
            raise InsufficientStockError(item_id, quantity, item.current_quantity)

        item.current_quantity -= quantity
        item.modified_at = self.clock()
        await self.item_store.update(item)
        logger.info("Removed %d units from item %s (now %d)", quantity, item_id, item.current_quantity)
        return item

    async def set_inventory(self, item_id: int, quantity: int) -> Item:
        """Set the on-hand quantity to an absolute value, e.g. after a count."""
        if quantity < 0:
            raise ValidationError("Quantity cannot be negative.", field="quantity")

        item = await self._require_item(item_id)
        item.current_quantity = quantity
        item.modified_at = self.clock()
        await self.item_store.update(item)
        logger.info("Set inventory of item %s to %d", item_id, quantity)
        return item

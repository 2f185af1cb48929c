"""Tests for ItemService."""

from decimal import Decimal

import pytest

from salestracker.errors import InsufficientStockError, NotFoundError, ValidationError
from salestracker.schemas.item import Item

pytestmark = pytest.mark.anyio


class TestInventoryLedger:
    def test_available_is_current_minus_allocated(self):
        item = Item(name="A", cost=Decimal("1"), current_quantity=5, allocated_quantity=8)
        assert item.available_quantity == -3
        assert item.is_backordered is True
        assert item.quantity_needed == 3

    def test_not_backordered_when_fully_covered(self):
        item = Item(name="A", cost=Decimal("1"), current_quantity=5, allocated_quantity=5)
        assert item.available_quantity == 0
        assert item.is_backordered is False
        assert item.quantity_needed == 0


class TestCreateItem:
    async def test_create_stamps_timestamps(self, item_service, now):
        item_id = await item_service.create_item(Item(name="Lamp", cost=Decimal("12.50")))

        item = await item_service.get_item(item_id)
        assert item.id == item_id
        assert item.created_at == now
        assert item.modified_at == now

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_blank_name_rejected(self, item_service, item_store, name):
        with pytest.raises(ValidationError):
            await item_service.create_item(Item(name=name, cost=Decimal("1")))
        assert await item_store.get_all() == []

    @pytest.mark.parametrize("cost", ["0", "-5"])
    async def test_non_positive_cost_rejected(self, item_service, cost):
        with pytest.raises(ValidationError) as exc_info:
            await item_service.create_item(Item(name="Lamp", cost=Decimal(cost)))
        assert exc_info.value.field == "cost"

    async def test_update_validates(self, item_service, make_item):
        item = await item_service.get_item(await make_item())
        item.cost = Decimal("0")
        with pytest.raises(ValidationError):
            await item_service.update_item(item)

    async def test_update_persists(self, item_service, make_item):
        item = await item_service.get_item(await make_item())
        item.name = "Renamed"
        await item_service.update_item(item)

        assert (await item_service.get_item(item.id)).name == "Renamed"

    async def test_delete(self, item_service, make_item):
        item_id = await make_item()
        await item_service.delete_item(item_id)
        assert await item_service.get_item(item_id) is None


class TestStockAdjustments:
    async def test_add_inventory(self, item_service, make_item):
        item_id = await make_item(current_quantity=3)
        await item_service.add_inventory(item_id, 4)
        assert (await item_service.get_item(item_id)).current_quantity == 7

    @pytest.mark.parametrize("quantity", [0, -1])
    async def test_add_inventory_requires_positive_quantity(self, item_service, make_item, quantity):
        item_id = await make_item()
        with pytest.raises(ValidationError):
            await item_service.add_inventory(item_id, quantity)

    async def test_add_inventory_missing_item(self, item_service):
        with pytest.raises(NotFoundError):
            await item_service.add_inventory(99, 1)

    async def test_remove_inventory(self, item_service, make_item):
        item_id = await make_item(current_quantity=5)
        await item_service.remove_inventory(item_id, 5)
        assert (await item_service.get_item(item_id)).current_quantity == 0

    async def test_remove_more_than_on_hand_fails_and_leaves_stock(self, item_service, make_item):
        item_id = await make_item(current_quantity=5)

        with pytest.raises(InsufficientStockError) as exc_info:
            await item_service.remove_inventory(item_id, 6)

        assert exc_info.value.requested == 6
        assert exc_info.value.available == 5
        assert (await item_service.get_item(item_id)).current_quantity == 5

    async def test_remove_inventory_requires_positive_quantity(self, item_service, make_item):
        item_id = await make_item()
        with pytest.raises(ValidationError):
            await item_service.remove_inventory(item_id, 0)

    async def test_remove_inventory_missing_item(self, item_service):
        with pytest.raises(NotFoundError):
            await item_service.remove_inventory(99, 1)

    async def test_set_inventory(self, item_service, make_item):
        item_id = await make_item(current_quantity=5)
        await item_service.set_inventory(item_id, 0)
        assert (await item_service.get_item(item_id)).current_quantity == 0

    async def test_set_inventory_rejects_negative(self, item_service, make_item):
        item_id = await make_item(current_quantity=5)
        with pytest.raises(ValidationError):
            await item_service.set_inventory(item_id, -1)
        assert (await item_service.get_item(item_id)).current_quantity == 5

    async def test_set_inventory_missing_item(self, item_service):
        with pytest.raises(NotFoundError):
            await item_service.set_inventory(99, 1)


class TestItemQueries:
    async def test_search_matches_name_description_and_id(self, item_service, make_item):
        lamp = await make_item(name="Desk Lamp")
        cable = await make_item(name="Cable", description="Braided USB-C")
        await make_item(name="Keyboard")

        assert [i.id for i in await item_service.search_items("lamp")] == [lamp]
        assert [i.id for i in await item_service.search_items("usb")] == [cable]
        assert [i.id for i in await item_service.search_items(str(cable))] == [cable]

    async def test_low_stock_uses_available_quantity(self, item_service, item_store, make_item):
        plenty = await make_item(current_quantity=50)
        low = await make_item(current_quantity=5)
        reserved = await make_item(current_quantity=20)
        item = await item_store.get_by_id(reserved)
        item.allocated_quantity = 15
        await item_store.update(item)

        ids = {i.id for i in await item_service.get_low_stock_items()}
        assert ids == {low, reserved}
        assert plenty not in {i.id for i in await item_service.get_low_stock_items(threshold=5)}

    async def test_backordered(self, item_service, item_store, make_item):
        await make_item(current_quantity=5)
        oversold = await make_item(current_quantity=2)
        item = await item_store.get_by_id(oversold)
        item.allocated_quantity = 3
        await item_store.update(item)

        assert [i.id for i in await item_service.get_backordered_items()] == [oversold]

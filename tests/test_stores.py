"""Tests for the record store and flag store implementations."""

from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from salestracker.models.item import ItemRecord
from salestracker.models.order import OrderRecord
from salestracker.schemas.item import Item
from salestracker.schemas.order import Order
from salestracker.services.item_service import ItemService
from salestracker.services.order_service import OrderService
from salestracker.stores.base import filter_records
from salestracker.stores.flags import InMemoryFlagStore, SettingsFlagStore
from salestracker.stores.memory import InMemoryRecordStore
from salestracker.stores.sql import SqlAlchemyRecordStore

pytestmark = pytest.mark.anyio


@pytest.fixture(params=["memory", "sql"])
def store(request, db_session):
    """An item store of each kind."""
    if request.param == "memory":
        return InMemoryRecordStore[Item]()
    return SqlAlchemyRecordStore(db_session, ItemRecord, Item)


def widget(**overrides):
    data = {"name": "Widget", "cost": Decimal("2.50"), "current_quantity": 4}
    data.update(overrides)
    return Item(**data)


class TestRecordStoreContract:
    async def test_add_assigns_ids(self, store):
        entity = widget()
        first = await store.add(entity)
        second = await store.add(widget(name="Other"))

        assert first != second
        assert entity.id is None
        fetched = await store.get_by_id(first)
        assert fetched.id == first
        assert fetched.name == "Widget"
        assert fetched.cost == Decimal("2.50")

    async def test_get_missing(self, store):
        assert await store.get_by_id(404) is None

    async def test_get_all(self, store):
        await store.add(widget(name="A"))
        await store.add(widget(name="B"))
        assert sorted(i.name for i in await store.get_all()) == ["A", "B"]

    async def test_returned_entities_are_copies(self, store):
        item_id = await store.add(widget())

        fetched = await store.get_by_id(item_id)
        fetched.current_quantity = 99

        assert (await store.get_by_id(item_id)).current_quantity == 4

    async def test_update(self, store):
        item_id = await store.add(widget())
        item = await store.get_by_id(item_id)
        item.allocated_quantity = 3
        item.description = "Changed"

        await store.update(item)

        stored = await store.get_by_id(item_id)
        assert stored.allocated_quantity == 3
        assert stored.description == "Changed"

    async def test_update_missing_is_silent(self, store):
        await store.update(widget(id=77))
        assert await store.get_by_id(77) is None

    async def test_delete(self, store):
        item_id = await store.add(widget())
        await store.delete(item_id)
        await store.delete(item_id)
        assert await store.get_by_id(item_id) is None

    async def test_query(self, store):
        await store.add(widget(name="Few", current_quantity=1))
        await store.add(widget(name="Many", current_quantity=50))

        result = await store.query(lambda i: i.current_quantity > 10)

        assert [i.name for i in result] == ["Many"]


def test_filter_records():
    assert filter_records([1, 2, 3, 4], lambda n: n % 2 == 0) == [2, 4]


class TestSqlOrderLifecycle:
    async def test_create_and_deliver_through_database(self, db_session):
        item_store = SqlAlchemyRecordStore(db_session, ItemRecord, Item)
        order_store = SqlAlchemyRecordStore(db_session, OrderRecord, Order)
        items = ItemService(item_store)
        orders = OrderService(order_store, item_store)

        item_id = await items.create_item(
            Item(name="Mug", cost=Decimal("10"), sale_price=Decimal("15"), current_quantity=20)
        )
        order_id = await orders.create_order(
            Order(customer_name="Ann", item_id=item_id, sell_date=datetime(2024, 5, 1), quantity=5)
        )

        item = await item_store.get_by_id(item_id)
        assert (item.current_quantity, item.allocated_quantity) == (20, 5)
        assert (await order_store.get_by_id(order_id)).price == Decimal("15")

        await orders.mark_as_delivered(order_id)

        item = await item_store.get_by_id(item_id)
        assert (item.current_quantity, item.allocated_quantity) == (15, 0)
        order = await order_store.get_by_id(order_id)
        assert order.has_delivered
        assert order.delivery_date is not None


class TestSqlCommitFailure:
    async def test_failed_update_rolls_back(self, db_session):
        store = SqlAlchemyRecordStore(db_session, ItemRecord, Item)
        item_id = await store.add(widget())
        item = await store.get_by_id(item_id)
        item.cost = None

        with pytest.raises(IntegrityError):
            await store.update(item)

        assert (await store.get_by_id(item_id)).cost == Decimal("2.50")
        other_id = await store.add(widget(name="Other"))
        assert (await store.get_by_id(other_id)).name == "Other"


class TestFlagStores:
    @pytest.fixture(params=["memory", "settings"])
    def flag_store(self, request, db_session):
        if request.param == "memory":
            return InMemoryFlagStore()
        return SettingsFlagStore(db_session)

    async def test_unset_flag_is_false(self, flag_store):
        assert await flag_store.get("salestracker_demo_data_loaded") is False
        assert await flag_store.get("unknown") is False

    async def test_set_and_clear(self, flag_store):
        await flag_store.set("salestracker_demo_data_loaded", True)
        assert await flag_store.get("salestracker_demo_data_loaded") is True

        await flag_store.set("salestracker_demo_data_loaded", False)
        assert await flag_store.get("salestracker_demo_data_loaded") is False

"""FastAPI dependencies that compose services from a database session."""
from fastapi import Depends
from sqlalchemy.orm import Session

from salestracker.config import settings
from salestracker.database import get_db
from salestracker.models.item import ItemRecord
from salestracker.models.order import OrderRecord
from salestracker.schemas.item import Item
from salestracker.schemas.order import Order
from salestracker.services.dashboard_service import DashboardService
from salestracker.services.demo_data import DemoDataFlagService, DemoDataService
from salestracker.services.item_service import ItemService
from salestracker.services.order_service import OrderService
from salestracker.stores.flags import SettingsFlagStore
from salestracker.stores.sql import SqlAlchemyRecordStore


def get_item_store(db: Session = Depends(get_db)) -> SqlAlchemyRecordStore[Item]:
    return SqlAlchemyRecordStore(db, ItemRecord, Item)


def get_order_store(db: Session = Depends(get_db)) -> SqlAlchemyRecordStore[Order]:
    return SqlAlchemyRecordStore(db, OrderRecord, Order)


def get_item_service(item_store=Depends(get_item_store)) -> ItemService:
    return ItemService(item_store)


def get_order_service(
    order_store=Depends(get_order_store),
    item_store=Depends(get_item_store),
) -> OrderService:
    return OrderService(order_store, item_store)


def get_dashboard_service(
    order_store=Depends(get_order_store),
    item_store=Depends(get_item_store),
) -> DashboardService:
    return DashboardService(order_store, item_store)


def get_demo_data_flag_service(db: Session = Depends(get_db)) -> DemoDataFlagService:
    return DemoDataFlagService(SettingsFlagStore(db))


def get_demo_data_service(
    item_service: ItemService = Depends(get_item_service),
    order_service: OrderService = Depends(get_order_service),
) -> DemoDataService:
    return DemoDataService(item_service, order_service, seed=settings.DEMO_DATA_SEED)

"""Script to load demo items and orders into the database."""
import asyncio
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from salestracker.config import settings
from salestracker.database import SessionLocal, engine, Base
from salestracker.models import ItemRecord, OrderRecord
from salestracker.schemas.item import Item
from salestracker.schemas.order import Order
from salestracker.services.demo_data import DemoDataFlagService, DemoDataService, load_demo_data
from salestracker.services.item_service import ItemService
from salestracker.services.order_service import OrderService
from salestracker.stores.flags import SettingsFlagStore
from salestracker.stores.sql import SqlAlchemyRecordStore


async def load(db) -> bool:
    item_store = SqlAlchemyRecordStore(db, ItemRecord, Item)
    order_store = SqlAlchemyRecordStore(db, OrderRecord, Order)
    demo_service = DemoDataService(
        ItemService(item_store),
        OrderService(order_store, item_store),
        seed=settings.DEMO_DATA_SEED,
    )
    return await load_demo_data(demo_service, DemoDataFlagService(SettingsFlagStore(db)))


def main():
    """Load demo data if it has not been loaded before."""
    # Create tables
    Base.metadata.create_all(bind=engine)
    
    db = SessionLocal()
    try:
        if asyncio.run(load(db)):
            print("Demo data loaded successfully!")
        else:
            print("Demo data was already loaded.")
    finally:
        db.close()


if __name__ == "__main__":
    main()

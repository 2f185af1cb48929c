# Record store package
from salestracker.stores.base import RecordStore, filter_records
from salestracker.stores.flags import FlagStore, InMemoryFlagStore, SettingsFlagStore
from salestracker.stores.memory import InMemoryRecordStore
from salestracker.stores.sql import SqlAlchemyRecordStore

# Models package
from salestracker.models.item import ItemRecord
from salestracker.models.order import OrderRecord
from salestracker.models.settings import Settings, SETTINGS_KEYS

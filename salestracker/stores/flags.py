"""Boolean flag stores.

A flag store is anything with ``get(key)`` and ``set(key, value)``
coroutines. One implementation is chosen per environment at startup.
"""
from typing import Dict, Optional, Protocol

from sqlalchemy.orm import Session

from salestracker.models.settings import Settings, SETTINGS_KEYS


class FlagStore(Protocol):
    async def get(self, key: str) -> bool:
        """Return the flag value, False if it was never set."""
        ...

    async def set(self, key: str, value: bool) -> None:
        ...


class InMemoryFlagStore:
    """Process-local flags."""

    def __init__(self):
        self._flags: Dict[str, bool] = {}

    async def get(self, key: str) -> bool:
        return self._flags.get(key, False)

    async def set(self, key: str, value: bool) -> None:
        self._flags[key] = value


class SettingsFlagStore:
    """Flags persisted as "true"/"false" in the settings table."""

    def __init__(self, db: Session):
        self.db = db

    def _get_setting(self, key: str) -> Optional[Settings]:
        return self.db.query(Settings).filter(Settings.key == key).first()

    async def get(self, key: str) -> bool:
        setting = self._get_setting(key)
        if setting and setting.value is not None:
            value = setting.value
        else:
            value = SETTINGS_KEYS.get(key, {}).get("default", "false")
        return value.lower() == "true"

    async def set(self, key: str, value: bool) -> None:
        setting = self._get_setting(key)
        if setting:
            setting.value = "true" if value else "false"
        else:
            setting = Settings(
                key=key,
                value="true" if value else "false",
                description=SETTINGS_KEYS.get(key, {}).get("description", "")
            )
            self.db.add(setting)
        self.db.commit()

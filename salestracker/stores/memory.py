"""In-memory record store."""
import itertools
import logging
from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

from salestracker.stores.base import Predicate, filter_records

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class InMemoryRecordStore(Generic[T]):
    """Dict-backed store, used for tests and throwaway sessions.

    Records are deep-copied on the way in and out so callers cannot change
    stored state without calling ``update``.
    """

    def __init__(self):
        self._records: Dict[int, T] = {}
        self._ids = itertools.count(1)

    async def get_all(self) -> List[T]:
        return [record.model_copy(deep=True) for record in self._records.values()]

    async def get_by_id(self, record_id: int) -> Optional[T]:
        record = self._records.get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    async def add(self, entity: T) -> int:
        record_id = next(self._ids)
        self._records[record_id] = entity.model_copy(update={"id": record_id}, deep=True)
        return record_id

    async def update(self, entity: T) -> None:
        if entity.id not in self._records:
            logger.debug("Ignoring update of missing %s %s", type(entity).__name__, entity.id)
            return
        self._records[entity.id] = entity.model_copy(deep=True)

    async def delete(self, record_id: int) -> None:
        self._records.pop(record_id, None)

    async def query(self, predicate: Predicate) -> List[T]:
        return filter_records(await self.get_all(), predicate)

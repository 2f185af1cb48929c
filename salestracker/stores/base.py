"""Record store contract consumed by the services.

Services never talk to a database directly; they receive one store per
entity type at composition time. Any object with these coroutines is a
store, there is no base class to inherit from.
"""
from typing import Callable, Iterable, List, Optional, Protocol, TypeVar

T = TypeVar("T")

Predicate = Callable[[T], bool]


class RecordStore(Protocol[T]):
    """Generic per-entity CRUD plus predicate queries.

    Entities carry an integer ``id`` assigned by the store on ``add``.
    Returned entities are copies: changes are only persisted by ``update``.
    """

    async def get_all(self) -> List[T]:
        ...

    async def get_by_id(self, record_id: int) -> Optional[T]:
        ...

    async def add(self, entity: T) -> int:
        """Persist a new entity and return its assigned ID."""
        ...

    async def update(self, entity: T) -> None:
        """Persist changes. Silently does nothing if the record is gone."""
        ...

    async def delete(self, record_id: int) -> None:
        """Delete a record. No-op if absent."""
        ...

    async def query(self, predicate: Predicate) -> List[T]:
        ...


def filter_records(records: Iterable[T], predicate: Predicate) -> List[T]:
    """Load-all-and-filter fallback for stores without native query support.

    O(n) in the number of records; fine for a small shop's data set.
    """
    return [record for record in records if predicate(record)]

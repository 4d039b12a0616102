# stockdesk/repositories/base.py
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel

R = TypeVar("R", bound=BaseModel)

# Fills fields derived at creation time (order numbers, dates) from the new id
CreateHook = Callable[[int, Dict[str, Any]], Dict[str, Any]]


class SequenceAllocator:
    """Monotonic id source owned by a repository."""

    def __init__(self, start: int = 1):
        self._next = start

    def allocate(self) -> int:
        value = self._next
        self._next += 1
        return value

    def observe(self, existing_id: int) -> None:
        # Seeded records keep their ids; new ones continue after the highest
        if existing_id >= self._next:
            self._next = existing_id + 1


def merge_derived(derived: Dict[str, Any], data: Dict[str, Any]) -> Dict[str, Any]:
    """Caller-supplied values win over derived ones unless they are None."""
    merged = dict(derived)
    merged.update({k: v for k, v in data.items() if v is not None or k not in derived})
    return merged


class Repository(ABC, Generic[R]):
    """Generic async collection store for one entity type.

    ``get`` answers None for an unknown id; ``update`` and ``delete`` raise
    :class:`stockdesk.errors.NotFoundError`. Records handed out are copies.
    """

    resource: str = "Record"
    record_type: Type[R]

    @abstractmethod
    async def list(self) -> List[R]: ...

    @abstractmethod
    async def get(self, record_id: int) -> Optional[R]: ...

    @abstractmethod
    async def create(self, data: Dict[str, Any]) -> R: ...

    @abstractmethod
    async def update(self, record_id: int, data: Dict[str, Any]) -> R: ...

    @abstractmethod
    async def delete(self, record_id: int) -> bool: ...

    async def bulk_create(self, rows: Iterable[Dict[str, Any]]) -> List[R]:
        return [await self.create(row) for row in rows]

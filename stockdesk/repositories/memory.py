# stockdesk/repositories/memory.py
import asyncio
import logging
from typing import Any, Dict, Iterable, List, Optional, Type

from stockdesk.errors import NotFoundError
from stockdesk.repositories.base import CreateHook, R, Repository, SequenceAllocator, merge_derived

logger = logging.getLogger(__name__)


class InMemoryRepository(Repository[R]):
    """Process-local store with an artificial delay on every call.

    Nothing survives a restart. Seed rows keep the ids they carry.
    """

    def __init__(
        self,
        record_type: Type[R],
        resource: str,
        *,
        seed: Optional[Iterable[Dict[str, Any]]] = None,
        latency: float = 0.0,
        on_create: Optional[CreateHook] = None,
        allocator: Optional[SequenceAllocator] = None,
    ):
        self.record_type = record_type
        self.resource = resource
        self.latency = latency
        self.on_create = on_create
        self.allocator = allocator or SequenceAllocator()
        self._rows: Dict[int, R] = {}

        for row in seed or []:
            record = record_type.model_validate(row)
            self._rows[record.id] = record
            self.allocator.observe(record.id)

    async def _delay(self):
        if self.latency > 0:
            await asyncio.sleep(self.latency)

    async def list(self) -> List[R]:
        await self._delay()
        return [r.model_copy(deep=True) for r in self._rows.values()]

    async def get(self, record_id: int) -> Optional[R]:
        await self._delay()
        record = self._rows.get(record_id)
        return record.model_copy(deep=True) if record else None

    async def create(self, data: Dict[str, Any]) -> R:
        await self._delay()
        new_id = self.allocator.allocate()
        fields = {k: v for k, v in data.items() if k != "id"}
        if self.on_create:
            fields = merge_derived(self.on_create(new_id, fields), fields)

        record = self.record_type.model_validate({**fields, "id": new_id})
        self._rows[new_id] = record
        logger.debug("%s %s created", self.resource, new_id)
        return record.model_copy(deep=True)

    async def update(self, record_id: int, data: Dict[str, Any]) -> R:
        await self._delay()
        current = self._rows.get(record_id)
        if current is None:
            raise NotFoundError(self.resource, record_id)

        merged = {**current.model_dump(), **{k: v for k, v in data.items() if k != "id"}}
        record = self.record_type.model_validate(merged)
        self._rows[record_id] = record
        return record.model_copy(deep=True)

    async def delete(self, record_id: int) -> bool:
        await self._delay()
        if self._rows.pop(record_id, None) is None:
            raise NotFoundError(self.resource, record_id)
        logger.debug("%s %s deleted", self.resource, record_id)
        return True

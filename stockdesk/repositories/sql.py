# stockdesk/repositories/sql.py
import logging
from typing import Any, Callable, Dict, List, Optional, Type

from fastapi.concurrency import run_in_threadpool
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from stockdesk.errors import NotFoundError
from stockdesk.repositories.base import CreateHook, R, Repository, merge_derived

logger = logging.getLogger(__name__)


class SqlRepository(Repository[R]):
    """Collection store backed by a SQLAlchemy table.

    Ids come from the database sequence. Order-like tables keep their lines in
    a child table; ``child_model`` maps the ``items`` list onto it.
    Session work runs in the threadpool so the event loop is never blocked.
    """

    def __init__(
        self,
        model,
        record_type: Type[R],
        resource: str,
        session_factory: Callable[[], Session],
        *,
        child_model=None,
        on_create: Optional[CreateHook] = None,
    ):
        self.model = model
        self.record_type = record_type
        self.resource = resource
        self.session_factory = session_factory
        self.child_model = child_model
        self.on_create = on_create
        self._columns = {c.key for c in inspect(model).column_attrs}

    # ---- helpers ----

    def _to_record(self, row) -> R:
        return self.record_type.model_validate(row)

    def _assign(self, row, data: Dict[str, Any]):
        for key, value in data.items():
            if key in self._columns and key != "id":
                setattr(row, key, value)
        if self.child_model is not None and "items" in data:
            row.items = [
                self.child_model(position=i, **_item_fields(item))
                for i, item in enumerate(data["items"] or [])
            ]

    def _get_row(self, db: Session, record_id: int):
        row = db.get(self.model, record_id)
        if row is None:
            raise NotFoundError(self.resource, record_id)
        return row

    # ---- sync bodies ----

    def _list(self) -> List[R]:
        with self.session_factory() as db:
            rows = db.query(self.model).order_by(self.model.id.asc()).all()
            return [self._to_record(r) for r in rows]

    def _get(self, record_id: int) -> Optional[R]:
        with self.session_factory() as db:
            row = db.get(self.model, record_id)
            return self._to_record(row) if row is not None else None

    def _create(self, data: Dict[str, Any]) -> R:
        with self.session_factory() as db:
            row = self.model()
            self._assign(row, data)
            db.add(row)
            db.flush()

            if self.on_create:
                derived = self.on_create(row.id, data)
                merged = merge_derived(derived, data)
                self._assign(row, {k: merged[k] for k in derived})

            db.commit()
            db.refresh(row)
            logger.debug("%s %s created", self.resource, row.id)
            return self._to_record(row)

    def _update(self, record_id: int, data: Dict[str, Any]) -> R:
        with self.session_factory() as db:
            row = self._get_row(db, record_id)
            # Same validation the in-memory store applies on merge
            self.record_type.model_validate({**self._to_record(row).model_dump(), **data})
            self._assign(row, data)
            db.commit()
            db.refresh(row)
            return self._to_record(row)

    def _delete(self, record_id: int) -> bool:
        with self.session_factory() as db:
            row = self._get_row(db, record_id)
            db.delete(row)
            db.commit()
            logger.debug("%s %s deleted", self.resource, record_id)
            return True

    # ---- Repository interface ----

    async def list(self) -> List[R]:
        return await run_in_threadpool(self._list)

    async def get(self, record_id: int) -> Optional[R]:
        return await run_in_threadpool(self._get, record_id)

    async def create(self, data: Dict[str, Any]) -> R:
        return await run_in_threadpool(self._create, data)

    async def update(self, record_id: int, data: Dict[str, Any]) -> R:
        return await run_in_threadpool(self._update, record_id, data)

    async def delete(self, record_id: int) -> bool:
        return await run_in_threadpool(self._delete, record_id)


def _item_fields(item) -> Dict[str, Any]:
    if hasattr(item, "model_dump"):
        item = item.model_dump()
    return {
        "product_id": item["product_id"],
        "quantity": item["quantity"],
        "unit_price": item["unit_price"],
    }

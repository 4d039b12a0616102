# stockdesk/repositories/__init__.py
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional

from fastapi import Request

from stockdesk.config import Settings
from stockdesk.repositories.base import Repository
from stockdesk.repositories.memory import InMemoryRepository
from stockdesk.repositories.sql import SqlRepository
from stockdesk.schemas.order import PurchaseOrderOut, SalesOrderOut
from stockdesk.schemas.product import ProductOut
from stockdesk.schemas.stock import StockMovementOut
from stockdesk.schemas.supplier import SupplierOut
from stockdesk.utils.numbering import purchase_order_number, sales_order_number

logger = logging.getLogger(__name__)


@dataclass
class Store:
    """The five collections the dashboard works with."""
    products: Repository[ProductOut]
    suppliers: Repository[SupplierOut]
    movements: Repository[StockMovementOut]
    sales_orders: Repository[SalesOrderOut]
    purchase_orders: Repository[PurchaseOrderOut]


# === Fields derived when a record is created ===

def _product_defaults(new_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    return {"created_at": date.today()}


def _movement_defaults(new_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    return {"timestamp": datetime.now(), "user_id": "admin"}


def _sales_order_defaults(new_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    today = date.today()
    return {
        "order_number": sales_order_number(new_id, today.year),
        "order_date": today,
        "fulfillment_date": None,
        "status": "Pending",
    }


def _purchase_order_defaults(new_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    today = date.today()
    return {
        "po_number": purchase_order_number(new_id, today.year),
        "order_date": today,
        "status": "Ordered",
    }


# === Builders ===

def build_memory_store(seed: Optional[Dict[str, list]] = None, latency_ms: int = 0) -> Store:
    seed = seed or {}
    # Per-collection delays; suppliers answer fastest
    def delay(ms):
        return max(ms, 0) / 1000.0

    return Store(
        products=InMemoryRepository(
            ProductOut, "Product", seed=seed.get("products"),
            latency=delay(latency_ms), on_create=_product_defaults,
        ),
        suppliers=InMemoryRepository(
            SupplierOut, "Supplier", seed=seed.get("suppliers"),
            latency=delay(latency_ms - 100),
        ),
        movements=InMemoryRepository(
            StockMovementOut, "Stock movement", seed=seed.get("movements"),
            latency=delay(latency_ms - 50), on_create=_movement_defaults,
        ),
        sales_orders=InMemoryRepository(
            SalesOrderOut, "Sales order", seed=seed.get("sales_orders"),
            latency=delay(latency_ms), on_create=_sales_order_defaults,
        ),
        purchase_orders=InMemoryRepository(
            PurchaseOrderOut, "Purchase order", seed=seed.get("purchase_orders"),
            latency=delay(latency_ms - 50), on_create=_purchase_order_defaults,
        ),
    )


def build_sql_store(session_factory) -> Store:
    from stockdesk import models

    return Store(
        products=SqlRepository(
            models.Product, ProductOut, "Product", session_factory,
            on_create=_product_defaults,
        ),
        suppliers=SqlRepository(models.Supplier, SupplierOut, "Supplier", session_factory),
        movements=SqlRepository(
            models.StockMovement, StockMovementOut, "Stock movement", session_factory,
            on_create=_movement_defaults,
        ),
        sales_orders=SqlRepository(
            models.SalesOrder, SalesOrderOut, "Sales order", session_factory,
            child_model=models.SalesOrderItem, on_create=_sales_order_defaults,
        ),
        purchase_orders=SqlRepository(
            models.PurchaseOrder, PurchaseOrderOut, "Purchase order", session_factory,
            child_model=models.PurchaseOrderItem, on_create=_purchase_order_defaults,
        ),
    )


def build_store(settings: Settings) -> Store:
    if settings.STORAGE_BACKEND == "sql":
        from stockdesk.database import SessionLocal, init_db

        init_db()
        logger.info("Using SQL store")
        return build_sql_store(SessionLocal)

    seed = None
    if settings.SEED_DATA:
        from stockdesk.populate_db import mock_data

        seed = mock_data()
    logger.info("Using in-memory store (latency %sms, seeded=%s)", settings.SIMULATED_LATENCY_MS, bool(seed))
    return build_memory_store(seed, settings.SIMULATED_LATENCY_MS)


# FastAPI dependency: the store built at startup lives on app.state
def get_store(request: Request) -> Store:
    return request.app.state.store


__all__ = [
    "Repository",
    "Store",
    "build_memory_store",
    "build_sql_store",
    "build_store",
    "get_store",
]

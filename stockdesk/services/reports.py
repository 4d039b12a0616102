# stockdesk/services/reports.py
import asyncio
import calendar
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Tuple

from stockdesk.repositories import Store
from stockdesk.schemas.order import PurchaseOrderOut, SalesOrderOut
from stockdesk.schemas.product import ProductOut
from stockdesk.schemas.reports import DashboardResponse, DateRange, ReportExport, ReportResponse
from stockdesk.schemas.stock import StockMovementOut
from stockdesk.schemas.supplier import SupplierOut
from stockdesk.services import aggregation
from stockdesk.services.inventory import movement_views, sort_newest_first

logger = logging.getLogger(__name__)

DASHBOARD_RECENT_MOVEMENTS = 5


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time copy of every collection, taken before any aggregation."""
    products: Tuple[ProductOut, ...] = ()
    suppliers: Tuple[SupplierOut, ...] = ()
    movements: Tuple[StockMovementOut, ...] = ()
    sales_orders: Tuple[SalesOrderOut, ...] = ()
    purchase_orders: Tuple[PurchaseOrderOut, ...] = ()


async def load_snapshot(store: Store) -> Snapshot:
    # Collections are fetched concurrently, the way the dashboard loads
    products, suppliers, movements, sales_orders, purchase_orders = await asyncio.gather(
        store.products.list(),
        store.suppliers.list(),
        store.movements.list(),
        store.sales_orders.list(),
        store.purchase_orders.list(),
    )
    return Snapshot(
        products=tuple(products),
        suppliers=tuple(suppliers),
        movements=tuple(movements),
        sales_orders=tuple(sales_orders),
        purchase_orders=tuple(purchase_orders),
    )


def default_window(today: Optional[date] = None) -> Tuple[date, date]:
    """First day of the month two months back through the end of this month."""
    today = today or date.today()
    month_index = today.year * 12 + today.month - 1 - 2
    start = date(month_index // 12, month_index % 12 + 1, 1)
    end = date(today.year, today.month, calendar.monthrange(today.year, today.month)[1])
    return start, end


def dashboard(snapshot: Snapshot, now: Optional[datetime] = None, horizon_days: int = 30) -> DashboardResponse:
    now = now or datetime.now()
    products = snapshot.products

    # Whole order book, no date window
    sales = aggregation.sales_performance(snapshot.sales_orders)
    recent = sort_newest_first(snapshot.movements, "timestamp")[:DASHBOARD_RECENT_MOVEMENTS]

    return DashboardResponse(
        stock_health=aggregation.stock_health_summary(products),
        pending_orders=sales.pending_orders,
        total_revenue=sales.total_revenue,
        supplier_count=len(snapshot.suppliers),
        low_stock_items=[p for p in products if aggregation.stock_status(p) == "low"],
        out_of_stock_items=[p for p in products if aggregation.stock_status(p) == "out"],
        expiring_products=aggregation.expiring_soon(products, horizon_days, now),
        expired_products=aggregation.expired(products, now),
        recent_movements=movement_views(recent, products),
    )


def build_report(
    snapshot: Snapshot,
    start: Optional[date] = None,
    end: Optional[date] = None,
    now: Optional[datetime] = None,
    top_n: int = 10,
) -> ReportResponse:
    orders = aggregation.within_window(snapshot.sales_orders, "order_date", start, end)

    return ReportResponse(
        date_range=DateRange(start_date=start, end_date=end),
        inventory_stats=aggregation.stock_health_summary(snapshot.products),
        sales_stats=aggregation.sales_performance(orders),
        top_products=aggregation.top_products_by_revenue(orders, snapshot.products, top_n),
        movement_series=aggregation.daily_movement_series(snapshot.movements, start, end),
        category_distribution=aggregation.category_distribution(snapshot.products),
        generated_at=now or datetime.now(),
    )


def export_report(report: ReportResponse) -> Tuple[str, str]:
    """Serialize a report for download. Returns (filename, JSON document)."""
    payload = ReportExport(
        date_range=report.date_range,
        inventory_stats=report.inventory_stats,
        sales_stats=report.sales_stats,
        top_products=report.top_products,
        generated_at=report.generated_at,
    )
    document = json.dumps(payload.model_dump(mode="json"), indent=2)
    filename = f"inventory-report-{report.generated_at.strftime('%Y-%m-%d')}.json"
    logger.info("Exported report %s", filename)
    return filename, document

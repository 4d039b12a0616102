# stockdesk/services/aggregation.py
"""
Pure aggregation rules behind the dashboard and the reports.

Every function takes already-loaded snapshots (lists of records) and returns
derived values. Nothing here performs I/O, mutates its input or raises on
empty collections: missing data degrades to zero / empty results.
"""
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union

from stockdesk.schemas.reports import MovementSeries, SalesPerformance, StockHealth, TopProduct

T = TypeVar("T")
Moment = Union[date, datetime]

UNKNOWN_PRODUCT_NAME = "Unknown Product"
UNKNOWN_PRODUCT_SKU = "N/A"

FULFILLED = "Fulfilled"
PENDING_STATUSES = {"Pending", "Processing"}


def _as_datetime(value: Moment) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _as_date(value: Moment) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


# =========================
# Per-record rules
# =========================

def stock_status(product) -> str:
    """Classify a product as ``out``, ``low`` or ``normal``.

    Out of stock wins over low stock: a product with nothing on hand is
    never counted as low.
    """
    if product.current_stock == 0:
        return "out"
    if product.current_stock <= product.reorder_level:
        return "low"
    return "normal"


def order_total(items: Iterable) -> float:
    return sum(item.quantity * item.unit_price for item in items)


def apply_movement(current_stock: int, movement_type: str, quantity: int) -> int:
    """Stock level after a movement. Outbound movements clamp at zero."""
    if movement_type == "IN":
        return current_stock + quantity
    return max(0, current_stock - quantity)


def adjustment_for(old_stock: int, new_stock: int) -> Optional[Tuple[str, int]]:
    """Movement (type, quantity) that explains a manual stock edit."""
    difference = new_stock - old_stock
    if difference == 0:
        return None
    return ("IN" if difference > 0 else "OUT", abs(difference))


def index_by_id(records: Iterable[T]) -> Dict[int, T]:
    return {r.id: r for r in records}


def resolve_product_label(product_id: int, products_by_id: Dict[int, object]) -> Tuple[str, str]:
    """(name, sku) for a product id, with a sentinel for deleted products."""
    product = products_by_id.get(product_id)
    if product is None:
        return UNKNOWN_PRODUCT_NAME, UNKNOWN_PRODUCT_SKU
    return product.name, product.sku


# =========================
# Collection filters
# =========================

def within_window(
    items: Iterable[T],
    field: str,
    start: Optional[Moment] = None,
    end: Optional[Moment] = None,
) -> List[T]:
    """Entries whose ``field`` falls inside [start, end], both ends inclusive.

    A bound given as a plain date covers that whole calendar day, so an
    ``end`` of 2024-01-31 keeps a movement stamped 2024-01-31 17:45.
    Missing bounds leave that side open.
    """
    result = []
    for item in items:
        value = getattr(item, field, None)
        if value is None:
            if start is None and end is None:
                result.append(item)
            continue
        if start is not None:
            if isinstance(start, datetime):
                if _as_datetime(value) < start:
                    continue
            elif _as_date(value) < start:
                continue
        if end is not None:
            if isinstance(end, datetime):
                if _as_datetime(value) > end:
                    continue
            elif _as_date(value) > end:
                continue
        result.append(item)
    return result


def expiring_soon(products: Iterable[T], horizon_days: int = 30, now: Optional[Moment] = None) -> List[T]:
    """Products expiring strictly after ``now`` and strictly before ``now + horizon_days``.

    Already expired products are not part of this set, see :func:`expired`.
    """
    current = _as_datetime(now) if now is not None else datetime.now()
    cutoff = current + timedelta(days=horizon_days)
    result = []
    for p in products:
        if p.expiration_date is None:
            continue
        expires = _as_datetime(p.expiration_date)
        if current < expires < cutoff:
            result.append(p)
    return result


def expired(products: Iterable[T], now: Optional[Moment] = None) -> List[T]:
    current = _as_datetime(now) if now is not None else datetime.now()
    return [
        p for p in products
        if p.expiration_date is not None and _as_datetime(p.expiration_date) <= current
    ]


# =========================
# Aggregates
# =========================

def stock_health_summary(products: Sequence) -> StockHealth:
    low_stock = 0
    out_of_stock = 0
    cost = 0.0
    retail = 0.0
    for p in products:
        status = stock_status(p)
        if status == "out":
            out_of_stock += 1
        elif status == "low":
            low_stock += 1
        cost += p.current_stock * p.unit_cost
        retail += p.current_stock * p.selling_price

    return StockHealth(
        total_products=len(products),
        low_stock_count=low_stock,
        out_of_stock_count=out_of_stock,
        total_inventory_cost=cost,
        total_inventory_retail_value=retail,
        potential_profit=retail - cost,
    )


def sales_performance(
    orders: Iterable,
    start: Optional[Moment] = None,
    end: Optional[Moment] = None,
) -> SalesPerformance:
    window = within_window(orders, "order_date", start, end)

    fulfilled = [o for o in window if o.status == FULFILLED]
    pending = sum(1 for o in window if o.status in PENDING_STATUSES)
    revenue = sum(o.total_amount for o in fulfilled)

    # No fulfilled orders means no revenue to average over
    avg = revenue / len(fulfilled) if fulfilled else 0.0

    return SalesPerformance(
        total_orders=len(window),
        fulfilled_orders=len(fulfilled),
        pending_orders=pending,
        total_revenue=revenue,
        avg_order_value=avg,
    )


def top_products_by_revenue(orders: Iterable, products: Iterable, n: int = 10) -> List[TopProduct]:
    """Rank products by revenue over the lines of fulfilled orders.

    Ties keep the order in which products were first seen.
    """
    totals: Dict[int, List[float]] = {}
    for order in orders:
        if order.status != FULFILLED:
            continue
        for item in order.items:
            entry = totals.setdefault(item.product_id, [0, 0.0])
            entry[0] += item.quantity
            entry[1] += item.quantity * item.unit_price

    products_by_id = index_by_id(products)
    ranked = []
    for product_id, (quantity, revenue) in totals.items():
        name, sku = resolve_product_label(product_id, products_by_id)
        ranked.append(TopProduct(
            product_id=product_id, name=name, sku=sku,
            quantity=int(quantity), revenue=revenue,
        ))

    ranked.sort(key=lambda t: t.revenue, reverse=True)
    return ranked[:max(n, 0)]


def daily_movement_series(
    movements: Iterable,
    start: Optional[Moment] = None,
    end: Optional[Moment] = None,
) -> MovementSeries:
    daily: Dict[date, List[int]] = defaultdict(lambda: [0, 0])
    for m in within_window(movements, "timestamp", start, end):
        day = _as_date(m.timestamp)
        if m.type == "IN":
            daily[day][0] += m.quantity
        else:
            daily[day][1] += m.quantity

    dates = sorted(daily)
    return MovementSeries(
        dates=dates,
        stock_in=[daily[d][0] for d in dates],
        stock_out=[daily[d][1] for d in dates],
    )


def category_distribution(products: Iterable) -> Dict[str, float]:
    values: Dict[str, float] = defaultdict(float)
    for p in products:
        values[p.category] += p.current_stock * p.unit_cost
    return dict(values)

# stockdesk/services/inventory.py
"""Mutations that touch more than one collection, plus list filtering."""
import logging
import time
from datetime import date
from typing import Iterable, List, Optional

from stockdesk.errors import InvalidInputError, NotFoundError
from stockdesk.repositories import Store
from stockdesk.schemas.order import (
    OrderItem, OrderItemDraft, OrderItemOut, PurchaseOrderOut, SalesOrderDetail, SalesOrderOut,
)
from stockdesk.schemas.product import ProductFilters, ProductOut
from stockdesk.schemas.stock import MovementFilters, StockMovementOut, StockMovementView
from stockdesk.schemas.supplier import SupplierOut
from stockdesk.services import aggregation

logger = logging.getLogger(__name__)


def _millis() -> int:
    return int(time.time() * 1000)


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


# =========================
# Order lines
# =========================

def clean_items(drafts: Iterable[OrderItemDraft]) -> List[OrderItem]:
    """Keep only complete lines (product, non-zero quantity and price)."""
    items = []
    for d in drafts:
        if not d.product_id or not d.quantity or not d.unit_price:
            logger.debug("Dropping incomplete order line %s", d)
            continue
        items.append(OrderItem(product_id=d.product_id, quantity=d.quantity, unit_price=d.unit_price))
    return items


def order_lines(items: Iterable[OrderItem], products: Iterable[ProductOut]) -> List[OrderItemOut]:
    products_by_id = aggregation.index_by_id(products)
    lines = []
    for it in items:
        name, sku = aggregation.resolve_product_label(it.product_id, products_by_id)
        lines.append(OrderItemOut(
            product_id=it.product_id,
            product_name=name,
            product_sku=sku,
            quantity=it.quantity,
            unit_price=it.unit_price,
            line_total=round(it.quantity * it.unit_price, 2),
        ))
    return lines


# =========================
# Stock
# =========================

async def _apply_to_product(store: Store, product_id: int, movement_type: str, quantity: int) -> Optional[ProductOut]:
    product = await store.products.get(product_id)
    if product is None:
        logger.warning("Movement for unknown product %s recorded without stock change", product_id)
        return None
    new_stock = aggregation.apply_movement(product.current_stock, movement_type, quantity)
    return await store.products.update(product_id, {"current_stock": new_stock})


async def record_movement(store: Store, data: dict) -> StockMovementOut:
    """Append a movement to the log and apply it to the product's stock."""
    data = dict(data)
    if not data.get("reference_id"):
        data["reference_id"] = f"MAN-{_millis()}"

    movement = await store.movements.create(data)
    await _apply_to_product(store, movement.product_id, movement.type, movement.quantity)
    logger.info("Recorded %s %s x%d (%s)", movement.type, movement.product_id, movement.quantity, movement.reason)
    return movement


async def update_product(store: Store, product_id: int, data: dict) -> ProductOut:
    """Merge product fields; a changed stock level is logged as an adjustment."""
    current = await store.products.get(product_id)
    if current is None:
        raise NotFoundError("Product", product_id)

    updated = await store.products.update(product_id, data)

    adjustment = aggregation.adjustment_for(current.current_stock, updated.current_stock)
    if adjustment:
        movement_type, quantity = adjustment
        await store.movements.create({
            "product_id": product_id,
            "type": movement_type,
            "quantity": quantity,
            "reason": "Stock Adjustment",
            "reference_id": f"ADJ-{_millis()}",
        })
        logger.info("Stock of product %s adjusted %s by %d", product_id, movement_type, quantity)
    return updated


async def low_stock_products(store: Store) -> List[ProductOut]:
    products = await store.products.list()
    return [p for p in products if aggregation.stock_status(p) != "normal"]


async def recent_movements(store: Store, limit: int = 10) -> List[StockMovementOut]:
    return sort_newest_first(await store.movements.list(), "timestamp")[:limit]


async def movements_for_product(store: Store, product_id: int) -> List[StockMovementOut]:
    movements = [m for m in await store.movements.list() if m.product_id == product_id]
    return sort_newest_first(movements, "timestamp")


# =========================
# Sales orders
# =========================

async def create_sales_order(store: Store, customer_name: str, drafts: Iterable[OrderItemDraft]) -> SalesOrderOut:
    items = clean_items(drafts)
    if not items:
        raise InvalidInputError("Please add at least one item to the order")

    order = await store.sales_orders.create({
        "customer_name": customer_name,
        "items": [i.model_dump() for i in items],
        "total_amount": aggregation.order_total(items),
        "status": "Pending",
    })
    logger.info("Created sales order %s (%.2f)", order.order_number, order.total_amount)
    return order


async def update_sales_order_status(store: Store, order_id: int, status: str) -> SalesOrderOut:
    """Change order status; the first move to Fulfilled ships the goods.

    Fulfilling stamps the fulfillment date once and books an outbound
    ``Sales Order`` movement for every line.
    """
    order = await store.sales_orders.get(order_id)
    if order is None:
        raise NotFoundError("Sales order", order_id)

    changes = {"status": status}
    first_fulfillment = status == "Fulfilled" and order.fulfillment_date is None
    if first_fulfillment:
        changes["fulfillment_date"] = date.today()

    updated = await store.sales_orders.update(order_id, changes)

    if first_fulfillment:
        for item in order.items:
            await record_movement(store, {
                "product_id": item.product_id,
                "type": "OUT",
                "quantity": item.quantity,
                "reason": "Sales Order",
                "reference_id": order.order_number,
            })
        logger.info("Sales order %s fulfilled", order.order_number)
    return updated


async def sales_order_detail(store: Store, order_id: int) -> SalesOrderDetail:
    order = await store.sales_orders.get(order_id)
    if order is None:
        raise NotFoundError("Sales order", order_id)
    products = await store.products.list()
    return SalesOrderDetail(**order.model_dump(), lines=order_lines(order.items, products))


# =========================
# Purchase orders
# =========================

async def create_purchase_order(
    store: Store,
    supplier_id: int,
    drafts: Iterable[OrderItemDraft],
    expected_delivery: Optional[date] = None,
) -> PurchaseOrderOut:
    items = clean_items(drafts)
    if not items:
        raise InvalidInputError("Please add at least one item to the purchase order")
    if await store.suppliers.get(supplier_id) is None:
        raise NotFoundError("Supplier", supplier_id)

    order = await store.purchase_orders.create({
        "supplier_id": supplier_id,
        "items": [i.model_dump() for i in items],
        "total_amount": aggregation.order_total(items),
        "expected_delivery": expected_delivery,
        "status": "Ordered",
    })
    logger.info("Created purchase order %s for supplier %s", order.po_number, supplier_id)
    return order


async def update_purchase_order_status(store: Store, order_id: int, status: str) -> PurchaseOrderOut:
    return await store.purchase_orders.update(order_id, {"status": status})


# =========================
# Filtering
# =========================

def sort_newest_first(records, field: str):
    # Records without a date go last
    return sorted(
        records,
        key=lambda r: (getattr(r, field) is not None, getattr(r, field) or date.min),
        reverse=True,
    )


def categories(products: Iterable[ProductOut]) -> List[str]:
    return sorted({p.category for p in products})


def filter_products(products: Iterable[ProductOut], filters: ProductFilters) -> List[ProductOut]:
    result = list(products)
    if filters.search:
        term = filters.search.lower()
        result = [
            p for p in result
            if _contains(p.name, term) or _contains(p.sku, term) or _contains(p.category, term)
        ]
    if filters.category:
        result = [p for p in result if p.category == filters.category]
    if filters.stock_level:
        result = [p for p in result if aggregation.stock_status(p) == filters.stock_level]
    if filters.supplier_id is not None:
        result = [p for p in result if p.supplier_id == filters.supplier_id]
    return result


def movement_views(movements: Iterable[StockMovementOut], products: Iterable[ProductOut]) -> List[StockMovementView]:
    products_by_id = aggregation.index_by_id(products)
    views = []
    for m in movements:
        name, sku = aggregation.resolve_product_label(m.product_id, products_by_id)
        views.append(StockMovementView(**m.model_dump(), product_name=name, product_sku=sku))
    return views


def filter_movements(movements: Iterable[StockMovementView], filters: MovementFilters) -> List[StockMovementView]:
    result = list(movements)
    if filters.search:
        term = filters.search.lower()
        result = [
            m for m in result
            if (
                m.product_name != aggregation.UNKNOWN_PRODUCT_NAME
                and (_contains(m.product_name, term) or _contains(m.product_sku, term))
            )
            or _contains(m.reason, term)
            or _contains(m.reference_id, term)
        ]
    if filters.type:
        result = [m for m in result if m.type == filters.type]
    if filters.reason:
        result = [m for m in result if m.reason == filters.reason]
    return result


def filter_sales_orders(orders: Iterable[SalesOrderOut], search: Optional[str] = None, status: Optional[str] = None) -> List[SalesOrderOut]:
    result = list(orders)
    if search:
        term = search.lower()
        result = [o for o in result if _contains(o.customer_name, term) or _contains(o.order_number, term)]
    if status:
        result = [o for o in result if o.status == status]
    return result


def filter_suppliers(suppliers: Iterable[SupplierOut], search: Optional[str] = None) -> List[SupplierOut]:
    if not search:
        return list(suppliers)
    term = search.lower()
    return [
        s for s in suppliers
        if _contains(s.name, term) or _contains(s.contact_person, term) or _contains(s.email, term)
    ]

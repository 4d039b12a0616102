# stockdesk/populate_db.py
"""Mock data for the in-memory store, and a loader for the SQL backend.

Dates are relative to today so the default report window always has data.

    STORAGE_BACKEND=sql python -m stockdesk.populate_db
"""
import asyncio
import logging
from datetime import date, datetime, time, timedelta
from typing import Dict, List

logger = logging.getLogger(__name__)


def _days_ago(n: int) -> date:
    return date.today() - timedelta(days=n)


def _at(days_ago: int, hour: int, minute: int = 0) -> datetime:
    return datetime.combine(_days_ago(days_ago), time(hour, minute))


def mock_data() -> Dict[str, List[dict]]:
    year = date.today().year

    suppliers = [
        {"id": 1, "name": "FreshFarm Produce", "contact_person": "Maria Lopez",
         "email": "maria@freshfarm.example", "phone": "555-0101",
         "address": "12 Orchard Rd, Salinas, CA", "payment_terms": "Net 30"},
        {"id": 2, "name": "Northwind Dairy", "contact_person": "Tom Berg",
         "email": "orders@northwind.example", "phone": "555-0144",
         "address": "4 Creamery Ln, Madison, WI", "payment_terms": "Net 15"},
        {"id": 3, "name": "Pantry Wholesale", "contact_person": "Aisha Khan",
         "email": "aisha@pantrywholesale.example", "phone": "555-0199",
         "address": "800 Depot St, Columbus, OH", "payment_terms": "2/10 Net 30"},
        {"id": 4, "name": "CleanCo Supplies", "contact_person": "Lee Park",
         "email": "sales@cleanco.example", "phone": "555-0170",
         "address": "55 Harbor Ave, Tacoma, WA", "payment_terms": "Net 45"},
    ]

    products = [
        {"id": 1, "sku": "PRD-001", "name": "Organic Apples (1kg)", "category": "Produce",
         "current_stock": 120, "reorder_level": 40, "unit_cost": 1.8, "selling_price": 3.49,
         "supplier_id": 1, "expiration_date": _days_ago(-12), "barcode": "4006381333931",
         "created_at": _days_ago(120)},
        {"id": 2, "sku": "PRD-002", "name": "Baby Spinach (250g)", "category": "Produce",
         "current_stock": 15, "reorder_level": 30, "unit_cost": 1.1, "selling_price": 2.79,
         "supplier_id": 1, "expiration_date": _days_ago(-4), "barcode": "4006381333948",
         "created_at": _days_ago(110)},
        {"id": 3, "sku": "DRY-001", "name": "Whole Milk (1L)", "category": "Dairy",
         "current_stock": 0, "reorder_level": 50, "unit_cost": 0.65, "selling_price": 1.29,
         "supplier_id": 2, "expiration_date": _days_ago(-9), "barcode": "4006381333955",
         "created_at": _days_ago(100)},
        {"id": 4, "sku": "DRY-002", "name": "Greek Yogurt (500g)", "category": "Dairy",
         "current_stock": 64, "reorder_level": 25, "unit_cost": 1.4, "selling_price": 2.99,
         "supplier_id": 2, "expiration_date": _days_ago(2), "barcode": "4006381333962",
         "created_at": _days_ago(95)},
        {"id": 5, "sku": "PAN-001", "name": "Basmati Rice (5kg)", "category": "Pantry",
         "current_stock": 42, "reorder_level": 20, "unit_cost": 6.5, "selling_price": 11.99,
         "supplier_id": 3, "expiration_date": _days_ago(-400), "barcode": "4006381333979",
         "created_at": _days_ago(200)},
        {"id": 6, "sku": "PAN-002", "name": "Olive Oil (750ml)", "category": "Pantry",
         "current_stock": 18, "reorder_level": 18, "unit_cost": 4.2, "selling_price": 8.49,
         "supplier_id": 3, "expiration_date": _days_ago(-300), "barcode": "4006381333986",
         "created_at": _days_ago(180)},
        {"id": 7, "sku": "CLN-001", "name": "Dish Soap (1L)", "category": "Household",
         "current_stock": 75, "reorder_level": 30, "unit_cost": 1.3, "selling_price": 2.99,
         "supplier_id": 4, "expiration_date": _days_ago(-700), "barcode": "4006381333993",
         "created_at": _days_ago(150)},
        {"id": 8, "sku": "CLN-002", "name": "Paper Towels (6 pack)", "category": "Household",
         "current_stock": 9, "reorder_level": 12, "unit_cost": 3.1, "selling_price": 5.99,
         "supplier_id": None, "expiration_date": None, "barcode": "4006381334006",
         "created_at": _days_ago(140)},
    ]

    movements = [
        {"id": 1, "product_id": 1, "type": "IN", "quantity": 100, "reason": "Purchase Order",
         "reference_id": f"PO-{year}-001", "timestamp": _at(40, 9, 15), "user_id": "admin"},
        {"id": 2, "product_id": 3, "type": "IN", "quantity": 60, "reason": "Purchase Order",
         "reference_id": f"PO-{year}-002", "timestamp": _at(38, 10, 0), "user_id": "admin"},
        {"id": 3, "product_id": 1, "type": "OUT", "quantity": 20, "reason": "Sales Order",
         "reference_id": f"SO-{year}-001", "timestamp": _at(30, 14, 30), "user_id": "admin"},
        {"id": 4, "product_id": 3, "type": "OUT", "quantity": 48, "reason": "Sales Order",
         "reference_id": f"SO-{year}-002", "timestamp": _at(21, 11, 5), "user_id": "admin"},
        {"id": 5, "product_id": 2, "type": "OUT", "quantity": 5, "reason": "Damage Adjustment",
         "reference_id": "DMG-0412", "timestamp": _at(21, 16, 40), "user_id": "admin"},
        {"id": 6, "product_id": 4, "type": "IN", "quantity": 40, "reason": "Purchase Order",
         "reference_id": f"PO-{year}-003", "timestamp": _at(12, 8, 20), "user_id": "admin"},
        {"id": 7, "product_id": 3, "type": "OUT", "quantity": 12, "reason": "Sales Order",
         "reference_id": f"SO-{year}-004", "timestamp": _at(6, 13, 10), "user_id": "admin"},
        {"id": 8, "product_id": 7, "type": "IN", "quantity": 3, "reason": "Return",
         "reference_id": "RET-0091", "timestamp": _at(3, 15, 0), "user_id": "admin"},
        {"id": 9, "product_id": 8, "type": "OUT", "quantity": 6, "reason": "Stock Count Adjustment",
         "reference_id": "CNT-0007", "timestamp": _at(1, 18, 25), "user_id": "admin"},
    ]

    sales_orders = [
        {"id": 1, "order_number": f"SO-{year}-001", "customer_name": "Corner Bistro",
         "items": [{"product_id": 1, "quantity": 20, "unit_price": 3.49}],
         "total_amount": 69.8, "status": "Fulfilled",
         "order_date": _days_ago(31), "fulfillment_date": _days_ago(30)},
        {"id": 2, "order_number": f"SO-{year}-002", "customer_name": "Greenway Cafe",
         "items": [{"product_id": 3, "quantity": 48, "unit_price": 1.29}],
         "total_amount": 61.92, "status": "Fulfilled",
         "order_date": _days_ago(22), "fulfillment_date": _days_ago(21)},
        {"id": 3, "order_number": f"SO-{year}-003", "customer_name": "Harbor Deli",
         "items": [{"product_id": 5, "quantity": 4, "unit_price": 11.99},
                   {"product_id": 6, "quantity": 2, "unit_price": 8.49}],
         "total_amount": 64.94, "status": "Processing",
         "order_date": _days_ago(9), "fulfillment_date": None},
        {"id": 4, "order_number": f"SO-{year}-004", "customer_name": "Corner Bistro",
         "items": [{"product_id": 3, "quantity": 12, "unit_price": 1.29},
                   {"product_id": 9, "quantity": 2, "unit_price": 4.5}],
         "total_amount": 24.48, "status": "Fulfilled",
         "order_date": _days_ago(7), "fulfillment_date": _days_ago(6)},
        {"id": 5, "order_number": f"SO-{year}-005", "customer_name": "Lakeside Market",
         "items": [{"product_id": 7, "quantity": 10, "unit_price": 2.99}],
         "total_amount": 29.9, "status": "Pending",
         "order_date": _days_ago(2), "fulfillment_date": None},
    ]

    purchase_orders = [
        {"id": 1, "po_number": f"PO-{year}-001", "supplier_id": 1,
         "items": [{"product_id": 1, "quantity": 100, "unit_price": 1.8}],
         "total_amount": 180.0, "status": "Received",
         "order_date": _days_ago(45), "expected_delivery": _days_ago(40)},
        {"id": 2, "po_number": f"PO-{year}-002", "supplier_id": 2,
         "items": [{"product_id": 3, "quantity": 60, "unit_price": 0.65}],
         "total_amount": 39.0, "status": "Received",
         "order_date": _days_ago(42), "expected_delivery": _days_ago(38)},
        {"id": 3, "po_number": f"PO-{year}-003", "supplier_id": 2,
         "items": [{"product_id": 4, "quantity": 40, "unit_price": 1.4}],
         "total_amount": 56.0, "status": "Received",
         "order_date": _days_ago(15), "expected_delivery": _days_ago(12)},
        {"id": 4, "po_number": f"PO-{year}-004", "supplier_id": 2,
         "items": [{"product_id": 3, "quantity": 80, "unit_price": 0.65}],
         "total_amount": 52.0, "status": "Ordered",
         "order_date": _days_ago(1), "expected_delivery": _days_ago(-5)},
    ]

    return {
        "suppliers": suppliers,
        "products": products,
        "movements": movements,
        "sales_orders": sales_orders,
        "purchase_orders": purchase_orders,
    }


async def populate(store) -> None:
    """Load the mock data through the repositories of an empty store."""
    data = mock_data()
    for name in ("suppliers", "products", "movements", "sales_orders", "purchase_orders"):
        repo = getattr(store, name)
        if await repo.list():
            logger.info("%s already populated, skipping", name)
            continue
        rows = [{k: v for k, v in row.items() if k != "id"} for row in data[name]]
        await repo.bulk_create(rows)
        logger.info("Inserted %d %s", len(rows), name)


if __name__ == "__main__":
    from stockdesk.config import settings
    from stockdesk.repositories import build_store

    logging.basicConfig(level=settings.LOG_LEVEL)
    asyncio.run(populate(build_store(settings)))

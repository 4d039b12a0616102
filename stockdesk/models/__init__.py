from stockdesk.models.supplier import Supplier
from stockdesk.models.product import Product
from stockdesk.models.stock import StockMovement
from stockdesk.models.order import SalesOrder, SalesOrderItem
from stockdesk.models.purchase import PurchaseOrder, PurchaseOrderItem

__all__ = [
    "Supplier",
    "Product",
    "StockMovement",
    "SalesOrder",
    "SalesOrderItem",
    "PurchaseOrder",
    "PurchaseOrderItem",
]

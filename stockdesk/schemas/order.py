# stockdesk/schemas/order.py
from datetime import date
from pydantic import BaseModel, Field
from typing import List, Optional, Literal

from stockdesk.schemas.common import ORMBase, RecordBase

SalesOrderStatus = Literal["Pending", "Processing", "Shipped", "Fulfilled"]

PurchaseOrderStatus = Literal["Ordered", "Shipped", "Received", "Cancelled"]


# Order line as submitted by the form; incomplete lines are dropped later
class OrderItemDraft(BaseModel):
    product_id: Optional[int] = None
    quantity: Optional[int] = Field(None, ge=0)
    unit_price: Optional[float] = Field(None, ge=0)


# Validated order line
class OrderItem(RecordBase):
    product_id: int
    quantity: int = Field(gt=0)
    unit_price: float = Field(ge=0)


# Output schema for a line joined with product display fields
class OrderItemOut(BaseModel):
    product_id: int
    product_name: str
    product_sku: str
    quantity: int
    unit_price: float
    line_total: float


# ---- Sales orders ----

class SalesOrderCreate(BaseModel):
    customer_name: str = Field(min_length=1)
    items: List[OrderItemDraft]


class SalesOrderUpdate(ORMBase):
    customer_name: Optional[str] = Field(None, min_length=1)


class SalesOrderOut(RecordBase):
    id: int
    order_number: Optional[str] = None
    customer_name: str
    items: List[OrderItem] = []
    total_amount: float = 0.0
    status: SalesOrderStatus = "Pending"
    order_date: Optional[date] = None
    fulfillment_date: Optional[date] = None


class SalesOrderDetail(SalesOrderOut):
    lines: List[OrderItemOut]


# Schema for updating sales order status
class SalesOrderStatusPatch(BaseModel):
    status: SalesOrderStatus


# ---- Purchase orders ----

class PurchaseOrderCreate(BaseModel):
    supplier_id: int
    items: List[OrderItemDraft]
    expected_delivery: Optional[date] = None


class PurchaseOrderUpdate(ORMBase):
    supplier_id: Optional[int] = None
    expected_delivery: Optional[date] = None


class PurchaseOrderOut(RecordBase):
    id: int
    po_number: Optional[str] = None
    supplier_id: int
    items: List[OrderItem] = []
    total_amount: float = 0.0
    status: PurchaseOrderStatus = "Ordered"
    order_date: Optional[date] = None
    expected_delivery: Optional[date] = None


class PurchaseOrderStatusPatch(BaseModel):
    status: PurchaseOrderStatus

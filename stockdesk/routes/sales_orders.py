# stockdesk/routes/sales_orders.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from stockdesk.repositories import Store, get_store
from stockdesk.schemas.order import (
    SalesOrderCreate, SalesOrderDetail, SalesOrderOut, SalesOrderStatus,
    SalesOrderStatusPatch, SalesOrderUpdate,
)
from stockdesk.services import inventory

router = APIRouter(prefix="/sales-orders", tags=["Sales orders"])


# Newest orders first
@router.get("", response_model=List[SalesOrderOut])
async def list_sales_orders(
    search: Optional[str] = Query(None, description="Customer name or order number"),
    status: Optional[SalesOrderStatus] = Query(None),
    store: Store = Depends(get_store),
):
    orders = inventory.sort_newest_first(await store.sales_orders.list(), "order_date")
    return inventory.filter_sales_orders(orders, search, status)


# Order with product names resolved for every line
@router.get("/{order_id}", response_model=SalesOrderDetail)
async def get_sales_order(order_id: int, store: Store = Depends(get_store)):
    return await inventory.sales_order_detail(store, order_id)


@router.post("", response_model=SalesOrderOut, status_code=201)
async def create_sales_order(
    payload: SalesOrderCreate,
    store: Store = Depends(get_store),
):
    return await inventory.create_sales_order(store, payload.customer_name.strip(), payload.items)


@router.patch("/{order_id}", response_model=SalesOrderOut)
async def update_sales_order(
    order_id: int,
    payload: SalesOrderUpdate,
    store: Store = Depends(get_store),
):
    return await store.sales_orders.update(order_id, payload.model_dump(exclude_unset=True))


# Fulfilling an order books the outbound stock movements
@router.patch("/{order_id}/status", response_model=SalesOrderOut)
async def update_sales_order_status(
    order_id: int,
    payload: SalesOrderStatusPatch,
    store: Store = Depends(get_store),
):
    return await inventory.update_sales_order_status(store, order_id, payload.status)


@router.delete("/{order_id}")
async def delete_sales_order(order_id: int, store: Store = Depends(get_store)):
    await store.sales_orders.delete(order_id)
    return {"ok": True}

# stockdesk/routes/purchase_orders.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from stockdesk.repositories import Store, get_store
from stockdesk.schemas.order import (
    PurchaseOrderCreate, PurchaseOrderOut, PurchaseOrderStatusPatch, PurchaseOrderUpdate,
)
from stockdesk.services import inventory

router = APIRouter(prefix="/purchase-orders", tags=["Purchase orders"])


@router.get("", response_model=List[PurchaseOrderOut])
async def list_purchase_orders(
    supplier_id: Optional[int] = Query(None),
    store: Store = Depends(get_store),
):
    orders = inventory.sort_newest_first(await store.purchase_orders.list(), "order_date")
    if supplier_id is not None:
        orders = [o for o in orders if o.supplier_id == supplier_id]
    return orders


@router.get("/{order_id}", response_model=PurchaseOrderOut)
async def get_purchase_order(order_id: int, store: Store = Depends(get_store)):
    order = await store.purchase_orders.get(order_id)
    if not order:
        raise HTTPException(status_code=404, detail="Purchase order not found")
    return order


@router.post("", response_model=PurchaseOrderOut, status_code=201)
async def create_purchase_order(
    payload: PurchaseOrderCreate,
    store: Store = Depends(get_store),
):
    return await inventory.create_purchase_order(
        store, payload.supplier_id, payload.items, payload.expected_delivery
    )


@router.patch("/{order_id}", response_model=PurchaseOrderOut)
async def update_purchase_order(
    order_id: int,
    payload: PurchaseOrderUpdate,
    store: Store = Depends(get_store),
):
    return await store.purchase_orders.update(order_id, payload.model_dump(exclude_unset=True))


@router.patch("/{order_id}/status", response_model=PurchaseOrderOut)
async def update_purchase_order_status(
    order_id: int,
    payload: PurchaseOrderStatusPatch,
    store: Store = Depends(get_store),
):
    return await inventory.update_purchase_order_status(store, order_id, payload.status)


@router.delete("/{order_id}")
async def delete_purchase_order(order_id: int, store: Store = Depends(get_store)):
    await store.purchase_orders.delete(order_id)
    return {"ok": True}

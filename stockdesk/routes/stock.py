# stockdesk/routes/stock.py
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional, List

from stockdesk.repositories import Store, get_store
from stockdesk.schemas.stock import MOVEMENT_REASONS, MovementReason, StockMovementType
from stockdesk.services import inventory
import stockdesk.schemas.stock as stock_schemas

router = APIRouter(prefix="/stock", tags=["Stock"])


@router.get("", response_model=List[stock_schemas.StockMovementView])
async def list_movements(
    search: Optional[str] = Query(None, description="Product name/SKU, reason or reference"),
    type: Optional[StockMovementType] = Query(None),
    reason: Optional[MovementReason] = Query(None),
    store: Store = Depends(get_store),
):
    movements = inventory.sort_newest_first(await store.movements.list(), "timestamp")
    views = inventory.movement_views(movements, await store.products.list())
    filters = stock_schemas.MovementFilters(search=search, type=type, reason=reason)
    return inventory.filter_movements(views, filters)


@router.get("/reasons", response_model=List[str])
def list_reasons():
    return list(MOVEMENT_REASONS)


@router.get("/recent", response_model=List[stock_schemas.StockMovementView])
async def list_recent_movements(
    limit: int = Query(10, ge=1, le=100),
    store: Store = Depends(get_store),
):
    movements = await inventory.recent_movements(store, limit)
    return inventory.movement_views(movements, await store.products.list())


@router.get("/product/{product_id}", response_model=List[stock_schemas.StockMovementView])
async def list_product_movements(product_id: int, store: Store = Depends(get_store)):
    movements = await inventory.movements_for_product(store, product_id)
    return inventory.movement_views(movements, await store.products.list())


@router.get("/{movement_id}", response_model=stock_schemas.StockMovementOut)
async def get_movement(movement_id: int, store: Store = Depends(get_store)):
    movement = await store.movements.get(movement_id)
    if not movement:
        raise HTTPException(status_code=404, detail="Stock movement not found")
    return movement


# Record a movement and apply it to the product's stock
@router.post("", response_model=stock_schemas.StockMovementOut, status_code=201)
async def create_movement(
    payload: stock_schemas.StockMovementCreate,
    store: Store = Depends(get_store),
):
    return await inventory.record_movement(store, payload.model_dump())


# Removes the log entry only; stock is left as it is
@router.delete("/{movement_id}")
async def delete_movement(movement_id: int, store: Store = Depends(get_store)):
    await store.movements.delete(movement_id)
    return {"ok": True}

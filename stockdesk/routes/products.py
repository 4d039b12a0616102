# stockdesk/routes/products.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from stockdesk.config import settings
from stockdesk.repositories import Store, get_store
from stockdesk.schemas.product import StockLevel
from stockdesk.services import aggregation, inventory
import stockdesk.schemas.product as product_schemas

router = APIRouter(prefix="/products", tags=["Products"])


def _norm_sku(sku: str) -> str:
    return sku.strip().upper()


async def _sku_taken(store: Store, sku: str, exclude_id: Optional[int] = None) -> bool:
    return any(
        p.sku.upper() == sku and p.id != exclude_id
        for p in await store.products.list()
    )


# =========================
# LIST / LOOKUPS
# =========================
@router.get("", response_model=List[product_schemas.ProductOut])
async def list_products(
    search: Optional[str] = Query(None, description="Name, SKU or category"),
    category: Optional[str] = Query(None),
    stock_level: Optional[StockLevel] = Query(None),
    supplier_id: Optional[int] = Query(None),
    store: Store = Depends(get_store),
):
    filters = product_schemas.ProductFilters(
        search=search, category=category, stock_level=stock_level, supplier_id=supplier_id
    )
    return inventory.filter_products(await store.products.list(), filters)


@router.get("/categories", response_model=product_schemas.CategoryList)
async def list_categories(store: Store = Depends(get_store)):
    return {"categories": inventory.categories(await store.products.list())}


@router.get("/low-stock", response_model=List[product_schemas.ProductOut])
async def list_low_stock(store: Store = Depends(get_store)):
    return await inventory.low_stock_products(store)


@router.get("/expiring", response_model=List[product_schemas.ProductOut])
async def list_expiring(
    days: int = Query(settings.EXPIRING_HORIZON_DAYS, ge=1, le=3650),
    store: Store = Depends(get_store),
):
    return aggregation.expiring_soon(await store.products.list(), days)


# Expiry date today or earlier
@router.get("/expired", response_model=List[product_schemas.ProductOut])
async def list_expired(store: Store = Depends(get_store)):
    return aggregation.expired(await store.products.list())


@router.get("/{product_id}", response_model=product_schemas.ProductOut)
async def get_product(product_id: int, store: Store = Depends(get_store)):
    product = await store.products.get(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


# =========================
# WRITE
# =========================
@router.post("", response_model=product_schemas.ProductOut, status_code=201)
async def create_product(
    payload: product_schemas.ProductCreate,
    store: Store = Depends(get_store),
):
    data = payload.model_dump()
    data["sku"] = _norm_sku(payload.sku)
    if not data["sku"]:
        raise HTTPException(status_code=400, detail="SKU is required")
    if await _sku_taken(store, data["sku"]):
        raise HTTPException(status_code=400, detail="SKU already exists")
    return await store.products.create(data)


@router.patch("/{product_id}", response_model=product_schemas.ProductOut)
async def update_product(
    product_id: int,
    payload: product_schemas.ProductUpdate,
    store: Store = Depends(get_store),
):
    data = payload.model_dump(exclude_unset=True)
    if "sku" in data:
        data["sku"] = _norm_sku(data["sku"] or "")
        if not data["sku"]:
            raise HTTPException(status_code=400, detail="SKU is required")
        if await _sku_taken(store, data["sku"], exclude_id=product_id):
            raise HTTPException(status_code=400, detail="SKU already exists")
    return await inventory.update_product(store, product_id, data)


# Overwrite the stock level without logging a movement
@router.patch("/{product_id}/stock", response_model=product_schemas.ProductOut)
async def update_stock(
    product_id: int,
    payload: product_schemas.StockUpdate,
    store: Store = Depends(get_store),
):
    return await store.products.update(product_id, {"current_stock": payload.current_stock})


# Movements and order lines keep pointing at the deleted id
@router.delete("/{product_id}")
async def delete_product(product_id: int, store: Store = Depends(get_store)):
    await store.products.delete(product_id)
    return {"ok": True}

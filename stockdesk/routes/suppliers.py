# stockdesk/routes/suppliers.py
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from stockdesk.repositories import Store, get_store
from stockdesk.services import inventory
import stockdesk.schemas.supplier as supplier_schemas

router = APIRouter(prefix="/suppliers", tags=["Suppliers"])


@router.get("", response_model=List[supplier_schemas.SupplierOut])
async def list_suppliers(
    search: Optional[str] = Query(None, description="Name, contact person or e-mail"),
    store: Store = Depends(get_store),
):
    return inventory.filter_suppliers(await store.suppliers.list(), search)


@router.get("/{supplier_id}", response_model=supplier_schemas.SupplierOut)
async def get_supplier(supplier_id: int, store: Store = Depends(get_store)):
    supplier = await store.suppliers.get(supplier_id)
    if not supplier:
        raise HTTPException(status_code=404, detail="Supplier not found")
    return supplier


@router.post("", response_model=supplier_schemas.SupplierOut, status_code=201)
async def create_supplier(
    payload: supplier_schemas.SupplierCreate,
    store: Store = Depends(get_store),
):
    return await store.suppliers.create(payload.model_dump())


@router.patch("/{supplier_id}", response_model=supplier_schemas.SupplierOut)
async def update_supplier(
    supplier_id: int,
    payload: supplier_schemas.SupplierUpdate,
    store: Store = Depends(get_store),
):
    return await store.suppliers.update(supplier_id, payload.model_dump(exclude_unset=True))


# Products keep their supplier_id; lookups simply stop resolving
@router.delete("/{supplier_id}")
async def delete_supplier(supplier_id: int, store: Store = Depends(get_store)):
    await store.suppliers.delete(supplier_id)
    return {"ok": True}

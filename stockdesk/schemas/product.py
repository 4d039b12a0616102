# stockdesk/schemas/product.py
from datetime import date
from pydantic import BaseModel, Field
from typing import Optional, List, Literal

from stockdesk.schemas.common import ORMBase, RecordBase

StockLevel = Literal["low", "out", "normal"]


# Shared base attributes for product entities
class ProductBase(ORMBase):
    sku: str
    name: str
    category: str = ""
    current_stock: int = Field(default=0, ge=0)
    reorder_level: int = Field(default=0, ge=0)
    unit_cost: float = Field(default=0.0, ge=0)
    selling_price: float = Field(default=0.0, ge=0)
    supplier_id: Optional[int] = None
    expiration_date: Optional[date] = None
    barcode: Optional[str] = None


# Schema for creating a new product
class ProductCreate(ProductBase):
    pass


# Schema for partial product updates
class ProductUpdate(ORMBase):
    """Schema for PATCH requests - all fields optional."""
    sku: Optional[str] = None
    name: Optional[str] = None
    category: Optional[str] = None
    current_stock: Optional[int] = Field(None, ge=0)
    reorder_level: Optional[int] = Field(None, ge=0)
    unit_cost: Optional[float] = Field(None, ge=0)
    selling_price: Optional[float] = Field(None, ge=0)
    supplier_id: Optional[int] = None
    expiration_date: Optional[date] = None
    barcode: Optional[str] = None


# Direct stock overwrite, bypassing the movement log
class StockUpdate(BaseModel):
    current_stock: int = Field(ge=0)


# Full product representation including ID
class ProductOut(RecordBase):
    id: int
    sku: str
    name: str
    category: str = ""
    current_stock: int = Field(default=0, ge=0)
    reorder_level: int = Field(default=0, ge=0)
    unit_cost: float = 0.0
    selling_price: float = 0.0
    supplier_id: Optional[int] = None
    expiration_date: Optional[date] = None
    barcode: Optional[str] = None
    created_at: Optional[date] = None


class ProductFilters(BaseModel):
    search: Optional[str] = None
    category: Optional[str] = None
    stock_level: Optional[StockLevel] = None
    supplier_id: Optional[int] = None


class CategoryList(BaseModel):
    categories: List[str]

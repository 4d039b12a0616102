# stockdesk/schemas/stock.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional, Literal, get_args

from stockdesk.schemas.common import ORMBase, RecordBase

# Define allowed types for stock movements
StockMovementType = Literal["IN", "OUT"]

# Fixed list of reasons a movement can be recorded with
MovementReason = Literal[
    "Purchase Order",
    "Sales Order",
    "Stock Adjustment",
    "Damage Adjustment",
    "Return",
    "Transfer",
    "Stock Count Adjustment",
    "Expiry Adjustment",
]
MOVEMENT_REASONS = get_args(MovementReason)


# Base schema for stock movement data
class StockMovementBase(ORMBase):
    product_id: int
    type: StockMovementType
    quantity: int = Field(gt=0)
    reason: MovementReason
    reference_id: Optional[str] = None


# Schema for creating a new stock movement
class StockMovementCreate(StockMovementBase):
    pass


# Log entry as stored; never mutated after creation
class StockMovementOut(RecordBase):
    id: int
    product_id: int
    type: StockMovementType
    quantity: int
    reason: MovementReason
    reference_id: Optional[str] = None
    timestamp: datetime
    user_id: str = "admin"


# Movement joined with product display fields for list views
class StockMovementView(StockMovementOut):
    product_name: str
    product_sku: str


class MovementFilters(BaseModel):
    search: Optional[str] = None
    type: Optional[StockMovementType] = None
    reason: Optional[MovementReason] = None

# stockdesk/schemas/reports.py
from datetime import datetime, date
from typing import Dict, List, Optional
from pydantic import BaseModel

from stockdesk.schemas.product import ProductOut
from stockdesk.schemas.stock import StockMovementView

# Stock health counters and valuation of the current inventory
class StockHealth(BaseModel):
    total_products: int = 0
    low_stock_count: int = 0
    out_of_stock_count: int = 0
    total_inventory_cost: float = 0.0
    total_inventory_retail_value: float = 0.0
    potential_profit: float = 0.0

# Order counters and recognised revenue for a window
class SalesPerformance(BaseModel):
    total_orders: int = 0
    fulfilled_orders: int = 0
    pending_orders: int = 0
    total_revenue: float = 0.0
    avg_order_value: float = 0.0

class TopProduct(BaseModel):
    product_id: int
    name: str
    sku: str
    quantity: int
    revenue: float

# Parallel series, one entry per day that had at least one movement
class MovementSeries(BaseModel):
    dates: List[date] = []
    stock_in: List[int] = []
    stock_out: List[int] = []

class DateRange(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None

class ReportResponse(BaseModel):
    date_range: DateRange
    inventory_stats: StockHealth
    sales_stats: SalesPerformance
    top_products: List[TopProduct]
    movement_series: MovementSeries
    category_distribution: Dict[str, float]
    generated_at: datetime

# Subset written to the downloadable report document
class ReportExport(BaseModel):
    date_range: DateRange
    inventory_stats: StockHealth
    sales_stats: SalesPerformance
    top_products: List[TopProduct]
    generated_at: datetime

class DashboardResponse(BaseModel):
    stock_health: StockHealth
    pending_orders: int
    total_revenue: float
    supplier_count: int
    low_stock_items: List[ProductOut]
    out_of_stock_items: List[ProductOut]
    expiring_products: List[ProductOut]
    expired_products: List[ProductOut]
    recent_movements: List[StockMovementView]

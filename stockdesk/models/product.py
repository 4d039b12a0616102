# stockdesk/models/product.py
from sqlalchemy import Column, Integer, String, Float, Date, CheckConstraint
from stockdesk.database import Base

# Product
# Catalog entry with pricing, stock level and reorder threshold.
# supplier_id is a soft reference: deleting the supplier does not touch products.
class Product(Base):
    __tablename__ = "products"
    # Ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False, index=True)
    category = Column(String, nullable=False, default="")

    # Stock data, kept non-negative by the constraint and by movement clamping.
    current_stock = Column(Integer, CheckConstraint("current_stock >= 0"), nullable=False, default=0)
    reorder_level = Column(Integer, CheckConstraint("reorder_level >= 0"), nullable=False, default=0)

    unit_cost = Column(Float, CheckConstraint("unit_cost >= 0"), nullable=False, default=0.0)
    selling_price = Column(Float, CheckConstraint("selling_price >= 0"), nullable=False, default=0.0)

    supplier_id = Column(Integer, nullable=True, index=True)
    expiration_date = Column(Date, nullable=True)
    barcode = Column(String, nullable=True)

    created_at = Column(Date, nullable=True)

# stockdesk/models/stock.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from stockdesk.database import Base

class StockMovement(Base):
    __tablename__ = "stock_movements"
    # Ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    # No foreign key: movement history outlives deleted products
    product_id = Column(Integer, nullable=False, index=True)

    # Movement direction (IN, OUT)
    type = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)

    reason = Column(String, nullable=False)
    reference_id = Column(String, nullable=True)

    timestamp = Column(DateTime, nullable=False, default=datetime.now, index=True)
    user_id = Column(String, nullable=False, default="admin")

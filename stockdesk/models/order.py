# stockdesk/models/order.py
from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey
from sqlalchemy.orm import relationship
from stockdesk.database import Base

class SalesOrder(Base):
    __tablename__ = "sales_orders"
    # Ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    order_number = Column(String, unique=True, nullable=True, index=True)
    customer_name = Column(String, nullable=False)
    total_amount = Column(Float, nullable=False, default=0.0)
    status = Column(String, nullable=False, default="Pending")
    order_date = Column(Date, nullable=True, index=True)
    fulfillment_date = Column(Date, nullable=True)

    items = relationship(
        "SalesOrderItem", back_populates="order",
        cascade="all, delete-orphan", order_by="SalesOrderItem.position",
    )

class SalesOrderItem(Base):
    __tablename__ = "sales_order_items"
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("sales_orders.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    # Plain column: lines keep pointing at products that were deleted later
    product_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)

    order = relationship("SalesOrder", back_populates="items")

# stockdesk/models/purchase.py
from sqlalchemy import Column, Integer, String, Float, Date, ForeignKey
from sqlalchemy.orm import relationship
from stockdesk.database import Base

class PurchaseOrder(Base):
    __tablename__ = "purchase_orders"
    # Ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    po_number = Column(String, unique=True, nullable=True, index=True)
    supplier_id = Column(Integer, nullable=False, index=True)
    total_amount = Column(Float, nullable=False, default=0.0)
    status = Column(String, nullable=False, default="Ordered")
    order_date = Column(Date, nullable=True, index=True)
    expected_delivery = Column(Date, nullable=True)

    items = relationship(
        "PurchaseOrderItem", back_populates="order",
        cascade="all, delete-orphan", order_by="PurchaseOrderItem.position",
    )

class PurchaseOrderItem(Base):
    __tablename__ = "purchase_order_items"
    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("purchase_orders.id"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    product_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)

    order = relationship("PurchaseOrder", back_populates="items")

# stockdesk/models/supplier.py
from sqlalchemy import Column, Integer, String
from stockdesk.database import Base

class Supplier(Base):
    __tablename__ = "suppliers"
    # Ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    contact_person = Column(String, nullable=False, default="")
    email = Column(String, nullable=False, default="")
    phone = Column(String, nullable=False, default="")
    address = Column(String, nullable=False, default="")
    # One of the fixed terms, e.g. "Net 30"
    payment_terms = Column(String, nullable=False, default="Net 30")

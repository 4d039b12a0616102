# stockdesk/schemas/supplier.py
from pydantic import BaseModel, Field
from typing import Optional, Literal

from stockdesk.schemas.common import ORMBase, RecordBase

PaymentTerms = Literal["Net 15", "Net 30", "Net 45", "2/10 Net 30"]


class SupplierBase(ORMBase):
    name: str = Field(min_length=1)
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    payment_terms: PaymentTerms = "Net 30"


class SupplierCreate(SupplierBase):
    pass


class SupplierUpdate(ORMBase):
    name: Optional[str] = Field(None, min_length=1)
    contact_person: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    payment_terms: Optional[PaymentTerms] = None


class SupplierOut(RecordBase):
    id: int
    name: str
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    address: str = ""
    payment_terms: PaymentTerms = "Net 30"

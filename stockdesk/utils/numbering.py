# stockdesk/utils/numbering.py
from datetime import date
from typing import Optional


# SO-2024-007 / PO-2024-012
def document_number(prefix: str, sequence: int, year: Optional[int] = None) -> str:
    year = year if year is not None else date.today().year
    return f"{prefix}-{year}-{sequence:03d}"


def sales_order_number(sequence: int, year: Optional[int] = None) -> str:
    return document_number("SO", sequence, year)


def purchase_order_number(sequence: int, year: Optional[int] = None) -> str:
    return document_number("PO", sequence, year)

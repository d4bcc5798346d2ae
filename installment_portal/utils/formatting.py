"""Display formatting in the portal's Indonesian locale"""

from datetime import date
from typing import Optional

EMPTY_PLACEHOLDER = "-"


def format_rupiah(amount: int) -> str:
    """Whole Rupiah with dot thousands separators: 1500000 -> 'Rp 1.500.000'"""
    sign = "-" if amount < 0 else ""
    return f"{sign}Rp {abs(amount):,}".replace(",", ".")


def format_date(value: Optional[date]) -> str:
    """dd/mm/yyyy, or '-' when there is no date"""
    if value is None:
        return EMPTY_PLACEHOLDER
    return value.strftime("%d/%m/%Y")


def format_due_day(day: Optional[int]) -> str:
    return str(day) if day is not None else EMPTY_PLACEHOLDER

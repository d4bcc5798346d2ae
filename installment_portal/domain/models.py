"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, List, Optional

# Store status text that marks an installment as paid ("Lunas" = paid off)
PAID_STATUS_VALUES = frozenset({"lunas", "paid"})

# No data source exists for down payments; always reported as zero
DOWN_PAYMENT_PLACEHOLDER = 0

DEFAULT_CUSTOMER_NAME = "Pelanggan"
DEFAULT_CUSTOMER_PHONE = "-"


class InstallmentStatus(str, Enum):
    """Two-valued payment status reified from the store's free-text field"""

    PAID = "Paid"
    UNPAID = "Unpaid"

    @classmethod
    def from_store(cls, raw: Optional[str]) -> "InstallmentStatus":
        if raw is not None and raw.strip().casefold() in PAID_STATUS_VALUES:
            return cls.PAID
        return cls.UNPAID


def parse_amount(value: Any) -> int:
    """Convert a store amount (int, float or numeric string) to whole Rupiah"""
    if value is None or isinstance(value, bool):
        raise ValueError(f"Invalid amount: {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {value!r}") from e
    if amount != amount.to_integral_value():
        raise ValueError(f"Amount is not a whole number: {value!r}")
    return int(amount)


def parse_date(value: Any) -> Optional[date]:
    """Accept a date, a datetime, or an ISO-8601 date/timestamp string"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


@dataclass
class Customer:
    """Customer record owned by the hosted store"""

    id: str
    name: str
    phone: str


@dataclass
class Installment:
    """Single scheduled payment of an installment-sale transaction"""

    id: str
    month: int  # 1-based position within its transaction
    amount: int
    due_date: date
    status: InstallmentStatus
    paid_date: Optional[date] = None

    @property
    def is_paid(self) -> bool:
        return self.status is InstallmentStatus.PAID


@dataclass
class Transaction:
    """Installment-sale transaction with its nested schedule"""

    id: str
    amount: int
    notes: Optional[str]
    created_at: datetime
    installments: List[Installment] = field(default_factory=list)


@dataclass
class InstallmentView:
    """Installment annotated for display"""

    id: str
    month: int
    label: str
    amount: int
    due_date: date
    status: InstallmentStatus
    paid_date: Optional[date]


@dataclass
class TransactionSummary:
    """Derived figures, recomputed on every read"""

    paid_count: int
    unpaid_count: int
    remaining_debt: int
    progress_percent: int
    next_due_date: Optional[date]
    next_due_day: Optional[int]  # day of month; None when nothing is unpaid


@dataclass
class TransactionView:
    """Per-transaction view model shown on the dashboard"""

    id: str
    item: str
    total_price: int
    down_payment: int
    tenor: int
    monthly_amount: int
    created_at: datetime
    installments: List[InstallmentView]
    summary: TransactionSummary


@dataclass
class DashboardData:
    """Everything one dashboard load fetched"""

    customer: Customer
    transactions: List[TransactionView]

    @property
    def is_empty(self) -> bool:
        return not self.transactions

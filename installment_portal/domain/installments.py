"""Installment aggregation: store transactions -> dashboard view models"""

from typing import Iterable, List, Optional

from installment_portal.config import settings
from installment_portal.domain.models import (
    DEFAULT_CUSTOMER_NAME,
    DEFAULT_CUSTOMER_PHONE,
    DOWN_PAYMENT_PLACEHOLDER,
    Customer,
    DashboardData,
    Installment,
    InstallmentView,
    Transaction,
    TransactionSummary,
    TransactionView,
)


def installment_label(month: int) -> str:
    return f"Cicilan Ke-{month}"


def item_description(notes: Optional[str], prefix: str | None = None) -> str:
    """Transaction note with the fixed literal prefix removed (first occurrence)"""
    if prefix is None:
        prefix = settings.item_note_prefix
    return (notes or "").replace(prefix, "", 1)


def sort_installments(installments: Iterable[Installment]) -> List[Installment]:
    return sorted(installments, key=lambda inst: inst.month)


def monthly_amount(installments: List[Installment]) -> int:
    """Amount of the first installment, a representative figure rather than a mean"""
    return installments[0].amount if installments else 0


def remaining_debt(installments: Iterable[Installment]) -> int:
    """Sum of every installment not yet paid"""
    return sum(inst.amount for inst in installments if not inst.is_paid)


def progress_percent(paid_count: int, tenor: int) -> int:
    """
    Share of installments paid, rounded half up to a whole percent.

    A transaction without installments reports 0.
    """
    if tenor <= 0:
        return 0
    # Integer form of floor(paid / tenor * 100 + 0.5)
    return (200 * paid_count + tenor) // (2 * tenor)


def next_unpaid(installments: List[Installment]) -> Optional[Installment]:
    """First unpaid installment by month, expects month-sorted input"""
    return next((inst for inst in installments if not inst.is_paid), None)


def summarize(installments: List[Installment]) -> TransactionSummary:
    paid_count = sum(1 for inst in installments if inst.is_paid)
    upcoming = next_unpaid(installments)

    return TransactionSummary(
        paid_count=paid_count,
        unpaid_count=len(installments) - paid_count,
        remaining_debt=remaining_debt(installments),
        progress_percent=progress_percent(paid_count, len(installments)),
        next_due_date=upcoming.due_date if upcoming else None,
        next_due_day=upcoming.due_date.day if upcoming else None,
    )


def build_transaction_view(transaction: Transaction, note_prefix: str | None = None) -> TransactionView:
    """Normalize one store transaction into its dashboard view model"""
    installments = sort_installments(transaction.installments)

    return TransactionView(
        id=transaction.id,
        item=item_description(transaction.notes, note_prefix),
        total_price=transaction.amount,
        down_payment=DOWN_PAYMENT_PLACEHOLDER,
        tenor=len(installments),
        monthly_amount=monthly_amount(installments),
        created_at=transaction.created_at,
        installments=[
            InstallmentView(
                id=inst.id,
                month=inst.month,
                label=installment_label(inst.month),
                amount=inst.amount,
                due_date=inst.due_date,
                status=inst.status,
                paid_date=inst.paid_date,
            )
            for inst in installments
        ],
        summary=summarize(installments),
    )


async def load_dashboard(store, customer_id: str, note_prefix: str | None = None) -> DashboardData:
    """
    Fetch and reshape everything the dashboard shows for one customer.

    Two sequential retrievals: the customer profile, then every
    installment-sale transaction (newest first) with its installments.
    Nothing is cached; every call hits the store.

    Raises:
        NotFoundError: unknown customer
        RetrievalError: any store failure
    """
    customer = await store.get_customer(customer_id)
    transactions = await store.list_installment_transactions(customer_id)

    profile = Customer(
        id=customer.id,
        name=customer.name or DEFAULT_CUSTOMER_NAME,
        phone=customer.phone or DEFAULT_CUSTOMER_PHONE,
    )
    return DashboardData(
        customer=profile,
        transactions=[build_transaction_view(trx, note_prefix) for trx in transactions],
    )

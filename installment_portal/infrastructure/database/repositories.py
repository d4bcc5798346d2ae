"""Read-only data access layer over the store's tables"""

from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload
from installment_portal.config import settings
from installment_portal.domain.exceptions import NotFoundError, RetrievalError
from installment_portal.domain.models import Customer, Installment, InstallmentStatus, Transaction
from installment_portal.infrastructure.database.models import CustomerRow, TransactionRow, InstallmentRow


def to_customer(row: CustomerRow) -> Customer:
    return Customer(id=row.id, name=row.name or "", phone=row.phone or "")


def to_installment(row: InstallmentRow) -> Installment:
    status = InstallmentStatus.from_store(row.status)
    return Installment(
        id=row.id,
        month=row.month,
        amount=row.amount,
        due_date=row.due_date,
        status=status,
        paid_date=row.paid_date if status is InstallmentStatus.PAID else None,
    )


def to_transaction(row: TransactionRow) -> Transaction:
    return Transaction(
        id=row.id,
        amount=row.amount,
        notes=row.notes,
        created_at=row.created_at,
        installments=[to_installment(inst) for inst in row.installments],
    )


class CustomerRepository:
    """Repository for customers"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, customer_id: str) -> Optional[CustomerRow]:
        return self.db.query(CustomerRow).filter(CustomerRow.id == customer_id).first()

    def find_by_phone_suffix(self, suffix: str, limit: int = 1) -> List[CustomerRow]:
        """Customers whose phone ends with ``suffix``"""
        return (
            self.db.query(CustomerRow)
            .filter(CustomerRow.phone.endswith(suffix, autoescape=True))
            .limit(limit)
            .all()
        )


class TransactionRepository:
    """Repository for installment-sale transactions"""

    def __init__(self, db: Session):
        self.db = db

    def list_by_customer(self, customer_id: str, transaction_type: str) -> List[TransactionRow]:
        """Transactions of one type for a customer, newest first, installments preloaded"""
        return (
            self.db.query(TransactionRow)
            .options(selectinload(TransactionRow.installments))
            .filter(TransactionRow.customer_id == customer_id, TransactionRow.type == transaction_type)
            .order_by(TransactionRow.created_at.desc())
            .all()
        )


class SqlStore:
    """Backing-store adapter over a direct database session. Never writes."""

    def __init__(self, db: Session, transaction_type: str | None = None):
        self.customers = CustomerRepository(db)
        self.transactions = TransactionRepository(db)
        self.transaction_type = transaction_type or settings.installment_transaction_type

    async def get_customer(self, customer_id: str) -> Customer:
        try:
            row = self.customers.get_by_id(customer_id)
        except SQLAlchemyError as e:
            raise RetrievalError(f"Customer query failed: {e}") from e

        if row is None:
            raise NotFoundError(f"Customer {customer_id} not found")
        return to_customer(row)

    async def find_customers_by_phone_suffix(self, suffix: str, limit: int = 1) -> List[Customer]:
        try:
            rows = self.customers.find_by_phone_suffix(suffix, limit=limit)
        except SQLAlchemyError as e:
            raise RetrievalError(f"Customer lookup failed: {e}") from e
        return [to_customer(row) for row in rows]

    async def list_installment_transactions(self, customer_id: str) -> List[Transaction]:
        try:
            rows = self.transactions.list_by_customer(customer_id, self.transaction_type)
            return [to_transaction(row) for row in rows]
        except SQLAlchemyError as e:
            raise RetrievalError(f"Transaction query failed: {e}") from e

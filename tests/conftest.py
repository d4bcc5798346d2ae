"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime, timedelta
from typing import Dict, Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from installment_portal.api.main import create_app
from installment_portal.api.dependencies import get_store
from installment_portal.domain.exceptions import NotFoundError, RetrievalError
from installment_portal.domain.models import Customer, Installment, InstallmentStatus, Transaction
from installment_portal.infrastructure.database.models import Base, CustomerRow, TransactionRow, InstallmentRow
from installment_portal.infrastructure.database.repositories import SqlStore


# Test database
TEST_DATABASE_URL = "sqlite://"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


def build_installments(
    count: int,
    paid: int = 0,
    amount: int = 500_000,
    first_due: date = date(2024, 1, 15),
) -> List[Installment]:
    """Monthly schedule where the first ``paid`` installments are settled"""
    installments = []
    for month in range(1, count + 1):
        due = first_due + timedelta(days=30 * (month - 1))
        is_paid = month <= paid
        installments.append(
            Installment(
                id=f"inst_{month}",
                month=month,
                amount=amount,
                due_date=due,
                status=InstallmentStatus.PAID if is_paid else InstallmentStatus.UNPAID,
                paid_date=due - timedelta(days=2) if is_paid else None,
            )
        )
    return installments


class FakeStore:
    """In-memory backing store that records every query"""

    def __init__(
        self,
        customers: List[Customer] | None = None,
        transactions: Dict[str, List[Transaction]] | None = None,
        fail: bool = False,
    ):
        self.customers = customers or []
        self.transactions = transactions or {}
        self.fail = fail
        self.calls: List[tuple] = []

    def _check(self) -> None:
        if self.fail:
            raise RetrievalError("connection refused")

    async def get_customer(self, customer_id: str) -> Customer:
        self.calls.append(("get_customer", customer_id))
        self._check()
        for customer in self.customers:
            if customer.id == customer_id:
                return customer
        raise NotFoundError(f"Customer {customer_id} not found")

    async def find_customers_by_phone_suffix(self, suffix: str, limit: int = 1) -> List[Customer]:
        self.calls.append(("find_customers_by_phone_suffix", suffix))
        self._check()
        return [c for c in self.customers if c.phone.endswith(suffix)][:limit]

    async def list_installment_transactions(self, customer_id: str) -> List[Transaction]:
        self.calls.append(("list_installment_transactions", customer_id))
        self._check()
        return list(self.transactions.get(customer_id, []))


@pytest.fixture
def installments_factory():
    return build_installments


@pytest.fixture
def sample_customer() -> Customer:
    return Customer(id="cust_1", name="Siti Aminah", phone="081234567890")


@pytest.fixture
def fake_store(sample_customer: Customer) -> FakeStore:
    """One customer with two installment purchases, newest first"""
    return FakeStore(
        customers=[sample_customer],
        transactions={
            sample_customer.id: [
                Transaction(
                    id="trx_new",
                    amount=3_000_000,
                    notes="Cicilan: Kulkas 2 Pintu",
                    created_at=datetime(2024, 3, 1, 9, 0),
                    installments=build_installments(6, paid=1, amount=500_000, first_due=date(2024, 4, 5)),
                ),
                Transaction(
                    id="trx_old",
                    amount=6_000_000,
                    notes="Cicilan: Motor Listrik",
                    created_at=datetime(2024, 1, 1, 9, 0),
                    installments=build_installments(12, paid=3, amount=500_000),
                ),
            ]
        },
    )


@pytest.fixture
def store_factory():
    return FakeStore


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded_db(db: Session) -> Session:
    """Customers, one with two installment sales plus a cash sale, one with nothing"""
    db.add_all(
        [
            CustomerRow(id="cust_1", name="Siti Aminah", phone="081234567890"),
            CustomerRow(id="cust_2", name="Budi", phone="085700001111"),
            TransactionRow(
                id="trx_old",
                customer_id="cust_1",
                type="CICILAN",
                amount=6_000_000,
                notes="Cicilan: Motor Listrik",
                created_at=datetime(2024, 1, 1, 9, 0),
            ),
            TransactionRow(
                id="trx_new",
                customer_id="cust_1",
                type="CICILAN",
                amount=3_000_000,
                notes=None,
                created_at=datetime(2024, 3, 1, 9, 0),
            ),
            TransactionRow(
                id="trx_cash",
                customer_id="cust_1",
                type="TUNAI",
                amount=250_000,
                notes="Pulsa",
                created_at=datetime(2024, 4, 1, 9, 0),
            ),
        ]
    )
    # Inserted out of month order on purpose
    for month in (3, 1, 2):
        db.add(
            InstallmentRow(
                id=f"new_{month}",
                transaction_id="trx_new",
                month=month,
                amount=1_000_000,
                due_date=date(2024, 3 + month, 5),
                status="Lunas" if month == 1 else "Belum",
                paid_date=date(2024, 4, 3) if month == 1 else None,
            )
        )
    for inst in build_installments(12, paid=3, amount=500_000):
        db.add(
            InstallmentRow(
                id=f"old_{inst.month}",
                transaction_id="trx_old",
                month=inst.month,
                amount=inst.amount,
                due_date=inst.due_date,
                status="Lunas" if inst.is_paid else "Belum",
                paid_date=inst.paid_date,
            )
        )
    db.commit()
    return db


@pytest.fixture
def client(seeded_db: Session) -> TestClient:
    """Create FastAPI test client backed by the seeded test database"""
    app = create_app()

    def override_get_store():
        return SqlStore(seeded_db)

    app.dependency_overrides[get_store] = override_get_store
    return TestClient(app)

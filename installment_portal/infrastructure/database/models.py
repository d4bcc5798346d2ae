"""SQLAlchemy ORM models mirroring the hosted store's tables (read-only use)"""

import uuid
from sqlalchemy import Column, BigInteger, Date, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class CustomerRow(Base):
    """Registered customer"""

    __tablename__ = "customers"

    id = Column(Text, primary_key=True, default=_new_id)
    name = Column(Text, nullable=True)
    phone = Column(Text, nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    transactions = relationship("TransactionRow", back_populates="customer")


class TransactionRow(Base):
    """Sale record; only type 'CICILAN' rows are installment sales"""

    __tablename__ = "transactions"

    id = Column(Text, primary_key=True, default=_new_id)
    customer_id = Column(Text, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Text, nullable=False)
    amount = Column(BigInteger, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    customer = relationship("CustomerRow", back_populates="transactions")
    installments = relationship("InstallmentRow", back_populates="transaction", order_by="InstallmentRow.month")


class InstallmentRow(Base):
    """Scheduled payment of an installment sale"""

    __tablename__ = "installments"

    id = Column(Text, primary_key=True, default=_new_id)
    transaction_id = Column(Text, ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False, index=True)
    month = Column(Integer, nullable=False)
    amount = Column(BigInteger, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(Text, nullable=True)
    paid_date = Column(Date, nullable=True)

    transaction = relationship("TransactionRow", back_populates="installments")

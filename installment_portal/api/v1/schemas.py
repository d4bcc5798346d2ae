"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date
from typing import List, Optional

from installment_portal.domain.models import Customer, InstallmentView, TransactionView
from installment_portal.utils.formatting import format_date, format_due_day, format_rupiah


class LoginRequest(BaseModel):
    """Request body for POST /v1/login"""

    code: str = Field(..., max_length=32, description="Last 4-6 digits of the registered phone number")


class LoginResponse(BaseModel):
    """Response for POST /v1/login"""

    customer_id: str
    customer_name: str
    dashboard_url: str


class ErrorDetail(BaseModel):
    """User-facing error with a way back to the login view"""

    message: str
    retry_url: str = "/"


class CustomerSchema(BaseModel):
    name: str
    phone: str

    @classmethod
    def from_domain(cls, customer: Customer) -> "CustomerSchema":
        return cls(name=customer.name, phone=customer.phone)


class InstallmentSchema(BaseModel):
    """Single installment row"""

    id: str
    month: int
    label: str
    amount: int
    amount_display: str
    due_date: date
    due_date_display: str
    status: str
    paid_date: Optional[date] = None
    paid_date_display: str

    @classmethod
    def from_view(cls, view: InstallmentView) -> "InstallmentSchema":
        return cls(
            id=view.id,
            month=view.month,
            label=view.label,
            amount=view.amount,
            amount_display=format_rupiah(view.amount),
            due_date=view.due_date,
            due_date_display=format_date(view.due_date),
            status=view.status.value,
            paid_date=view.paid_date,
            paid_date_display=format_date(view.paid_date),
        )


class SummarySchema(BaseModel):
    """Derived figures for one transaction"""

    paid_count: int
    unpaid_count: int
    remaining_debt: int
    remaining_debt_display: str
    progress_percent: int
    next_due_date: Optional[date] = None
    next_due_day: Optional[int] = None
    next_due_day_display: str


class TransactionSchema(BaseModel):
    """One installment purchase"""

    id: str
    item: str
    total_price: int
    total_price_display: str
    down_payment: int = Field(0, description="Always 0; no data source for down payments")
    tenor: int
    monthly_amount: int
    monthly_amount_display: str
    installments: List[InstallmentSchema]
    summary: SummarySchema

    @classmethod
    def from_view(cls, view: TransactionView) -> "TransactionSchema":
        summary = view.summary
        return cls(
            id=view.id,
            item=view.item,
            total_price=view.total_price,
            total_price_display=format_rupiah(view.total_price),
            down_payment=view.down_payment,
            tenor=view.tenor,
            monthly_amount=view.monthly_amount,
            monthly_amount_display=format_rupiah(view.monthly_amount),
            installments=[InstallmentSchema.from_view(inst) for inst in view.installments],
            summary=SummarySchema(
                paid_count=summary.paid_count,
                unpaid_count=summary.unpaid_count,
                remaining_debt=summary.remaining_debt,
                remaining_debt_display=format_rupiah(summary.remaining_debt),
                progress_percent=summary.progress_percent,
                next_due_date=summary.next_due_date,
                next_due_day=summary.next_due_day,
                next_due_day_display=format_due_day(summary.next_due_day),
            ),
        )


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard/{customer_id}"""

    customer_id: str
    state: str
    customer: CustomerSchema
    transactions: List[TransactionSchema]
    selected_index: Optional[int] = None
    active: Optional[TransactionSchema] = None
    message: Optional[str] = None

"""Hosted store (PostgREST) HTTP client for customer and installment lookups"""

from datetime import datetime
from typing import Any, Dict, List

import httpx

from installment_portal.config import settings
from installment_portal.domain.exceptions import NotFoundError, RetrievalError
from installment_portal.domain.models import (
    Customer,
    Installment,
    InstallmentStatus,
    Transaction,
    parse_amount,
    parse_date,
)

TRANSACTION_SELECT = "id,amount,notes,created_at,installments(id,amount,due_date,status,paid_date,month)"


def customer_from_row(row: Dict[str, Any], customer_id: str | None = None) -> Customer:
    return Customer(
        id=str(customer_id if customer_id is not None else row["id"]),
        name=row.get("name") or "",
        phone=row.get("phone") or "",
    )


def installment_from_row(row: Dict[str, Any]) -> Installment:
    status = InstallmentStatus.from_store(row.get("status"))
    due_date = parse_date(row["due_date"])
    if due_date is None:
        raise ValueError(f"Installment {row.get('id')} has no due date")
    return Installment(
        id=str(row["id"]),
        month=int(row["month"]),
        amount=parse_amount(row["amount"]),
        due_date=due_date,
        status=status,
        paid_date=parse_date(row.get("paid_date")) if status is InstallmentStatus.PAID else None,
    )


def transaction_from_row(row: Dict[str, Any]) -> Transaction:
    return Transaction(
        id=str(row["id"]),
        amount=parse_amount(row["amount"]),
        notes=row.get("notes"),
        created_at=datetime.fromisoformat(row["created_at"]),
        installments=[installment_from_row(inst) for inst in row.get("installments") or []],
    )


class RestStoreClient:
    """Read-only client for the hosted store's REST interface"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transaction_type: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.supabase_url).rstrip("/")
        self.api_key = api_key or settings.supabase_anon_key
        self.timeout = timeout or settings.http_timeout_seconds
        self.transaction_type = transaction_type or settings.installment_transaction_type
        self.transport = transport

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
        }

    async def _select(self, table: str, params: Dict[str, str]) -> List[Dict[str, Any]]:
        """
        Run one GET against ``/rest/v1/{table}`` and return the JSON rows.

        Raises:
            RetrievalError: On timeout, transport/HTTP errors, or a non-list body
        """
        async with httpx.AsyncClient(
            base_url=f"{self.base_url}/rest/v1",
            headers=self.headers,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                response = await client.get(f"/{table}", params=params)
                response.raise_for_status()
                rows = response.json()
            except httpx.TimeoutException as e:
                raise RetrievalError(f"Store timeout after {self.timeout}s on {table}") from e
            except httpx.HTTPStatusError as e:
                raise RetrievalError(f"Store error on {table}: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise RetrievalError(f"Store unreachable on {table}: {e}") from e
            except ValueError as e:
                raise RetrievalError(f"Store returned invalid JSON for {table}") from e

        if not isinstance(rows, list):
            raise RetrievalError(f"Unexpected response shape for {table}: {type(rows).__name__}")
        return rows

    async def get_customer(self, customer_id: str) -> Customer:
        """Exact lookup by identifier, projecting name and phone"""
        rows = await self._select(
            "customers",
            {"select": "name,phone", "id": f"eq.{customer_id}", "limit": "1"},
        )
        if not rows:
            raise NotFoundError(f"Customer {customer_id} not found")

        try:
            return customer_from_row(rows[0], customer_id)
        except (AttributeError, TypeError) as e:
            raise RetrievalError(f"Invalid customer data from store: {e}") from e

    async def find_customers_by_phone_suffix(self, suffix: str, limit: int = 1) -> List[Customer]:
        """Customers whose phone ends with ``suffix``"""
        rows = await self._select(
            "customers",
            {"select": "id,name,phone", "phone": f"ilike.*{suffix}", "limit": str(limit)},
        )
        try:
            return [customer_from_row(row) for row in rows]
        except (KeyError, AttributeError, TypeError) as e:
            raise RetrievalError(f"Invalid customer data from store: {e}") from e

    async def list_installment_transactions(self, customer_id: str) -> List[Transaction]:
        """Installment-sale transactions of one customer, newest first"""
        rows = await self._select(
            "transactions",
            {
                "select": TRANSACTION_SELECT,
                "customer_id": f"eq.{customer_id}",
                "type": f"eq.{self.transaction_type}",
                "order": "created_at.desc",
            },
        )
        try:
            return [transaction_from_row(row) for row in rows]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise RetrievalError(f"Invalid transaction data from store: {e}") from e

"""Dashboard screen flow: load once, then switch between fetched transactions"""

import logging
from enum import Enum
from typing import Optional

from installment_portal.domain.exceptions import (
    InvalidStateError,
    NotFoundError,
    RetrievalError,
    ValidationError,
)
from installment_portal.domain.installments import load_dashboard
from installment_portal.domain.models import DashboardData, TransactionView

logger = logging.getLogger(__name__)


class ScreenState(str, Enum):
    UNRESOLVED = "unresolved"
    RESOLVING = "resolving"
    RESOLVED_WITH_DATA = "resolved_with_data"
    RESOLVED_EMPTY = "resolved_empty"
    ERROR = "error"


class DashboardSession:
    """
    Transient view state for one customer's dashboard.

    Flow: UNRESOLVED -> RESOLVING -> RESOLVED_WITH_DATA | RESOLVED_EMPTY | ERROR.
    Switching the active transaction is only allowed from RESOLVED_WITH_DATA
    and works on the data already fetched.
    """

    def __init__(self, store, customer_id: str, note_prefix: str | None = None):
        self.store = store
        self.customer_id = customer_id
        self.note_prefix = note_prefix
        self.state = ScreenState.UNRESOLVED
        self.data: Optional[DashboardData] = None
        self.error: Optional[Exception] = None
        self.selected_index = 0

    @property
    def error_message(self) -> Optional[str]:
        return getattr(self.error, "user_message", None)

    async def load(self) -> ScreenState:
        """Fetch dashboard data; store failures end in ERROR instead of raising"""
        if self.state is not ScreenState.UNRESOLVED:
            raise InvalidStateError(f"Cannot load dashboard from state {self.state.value}")

        self.state = ScreenState.RESOLVING
        try:
            self.data = await load_dashboard(self.store, self.customer_id, self.note_prefix)
        except (NotFoundError, RetrievalError) as e:
            logger.error(f"Dashboard load failed: {e}", extra={"customer_id": self.customer_id})
            self.error = e
            self.state = ScreenState.ERROR
            return self.state

        self.selected_index = 0
        self.state = ScreenState.RESOLVED_EMPTY if self.data.is_empty else ScreenState.RESOLVED_WITH_DATA
        return self.state

    def select_transaction(self, index: int) -> TransactionView:
        if self.state is not ScreenState.RESOLVED_WITH_DATA:
            raise InvalidStateError(f"Cannot switch transaction in state {self.state.value}")
        if not 0 <= index < len(self.data.transactions):
            raise ValidationError(
                f"Transaction index {index} out of range",
                user_message="Pilihan barang cicilan tidak tersedia",
            )

        self.selected_index = index
        return self.data.transactions[index]

    @property
    def active(self) -> Optional[TransactionView]:
        if self.state is not ScreenState.RESOLVED_WITH_DATA:
            return None
        return self.data.transactions[self.selected_index]

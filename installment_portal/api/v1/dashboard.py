"""GET /v1/dashboard/{customer_id} - installment purchases and payment progress"""

import time
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from installment_portal.api.v1.schemas import (
    CustomerSchema,
    DashboardResponse,
    ErrorDetail,
    TransactionSchema,
)
from installment_portal.api.dependencies import get_request_id, get_store
from installment_portal.domain.dashboard import DashboardSession, ScreenState
from installment_portal.domain.exceptions import NO_ACTIVE_BILLS_MESSAGE, NotFoundError, ValidationError
from installment_portal.infrastructure.observability.metrics import record_dashboard_load, store_failures_counter
from installment_portal.infrastructure.observability.logging import log_dashboard_load

router = APIRouter()


@router.get("/dashboard/{customer_id}", response_model=DashboardResponse)
async def get_dashboard(
    customer_id: str,
    request: Request,
    selected: int = Query(0, description="Index of the transaction to show as active"),
    store=Depends(get_store),
):
    """
    Load a customer's installment purchases, newest first.

    Every transaction is returned so the client can switch between them
    without another request; ``selected`` only picks the initial ``active``.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    session = DashboardSession(store, customer_id)
    state = await session.load()

    record_dashboard_load(state.value)
    log_dashboard_load(
        request_id,
        customer_id,
        state.value,
        len(session.data.transactions) if session.data else 0,
        (time.time() - start_time) * 1000,
    )

    if state is ScreenState.ERROR:
        status_code = 404 if isinstance(session.error, NotFoundError) else 503
        if status_code == 503:
            store_failures_counter.labels(operation="dashboard").inc()
        raise HTTPException(status_code=status_code, detail=ErrorDetail(message=session.error_message).model_dump())

    response = DashboardResponse(
        customer_id=customer_id,
        state=state.value,
        customer=CustomerSchema.from_domain(session.data.customer),
        transactions=[TransactionSchema.from_view(view) for view in session.data.transactions],
    )

    if state is ScreenState.RESOLVED_EMPTY:
        response.message = NO_ACTIVE_BILLS_MESSAGE
        return response

    try:
        session.select_transaction(selected)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=ErrorDetail(message=e.user_message).model_dump())

    response.selected_index = session.selected_index
    response.active = response.transactions[session.selected_index]
    return response

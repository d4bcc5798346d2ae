"""POST /v1/login - resolve a customer from trailing phone digits"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from installment_portal.api.v1.schemas import ErrorDetail, LoginRequest, LoginResponse
from installment_portal.api.dependencies import get_request_id, get_store
from installment_portal.domain.identity import normalize_suffix, resolve_customer
from installment_portal.domain.exceptions import NotFoundError, RetrievalError, ValidationError
from installment_portal.infrastructure.observability.metrics import record_login, store_failures_counter
from installment_portal.infrastructure.observability.logging import log_login

router = APIRouter()


def _error(status_code: int, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail=ErrorDetail(message=message).model_dump())


@router.post("/login", response_model=LoginResponse)
async def login(request_body: LoginRequest, request: Request, store=Depends(get_store)):
    """
    Resolve the customer whose phone number ends with the submitted digits.

    On success the client navigates to ``dashboard_url``; on any error it
    stays on the login view and shows ``detail.message``.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    suffix = normalize_suffix(request_body.code)

    def finish(outcome: str, customer_id: str | None = None) -> None:
        record_login(outcome)
        log_login(request_id, suffix, outcome, (time.time() - start_time) * 1000, customer_id)

    try:
        customer = await resolve_customer(store, request_body.code)

    except ValidationError as e:
        finish("invalid")
        raise _error(422, e.user_message)

    except NotFoundError as e:
        finish("not_found")
        raise _error(404, e.user_message)

    except RetrievalError as e:
        store_failures_counter.labels(operation="login").inc()
        logging.error(f"Store error during login: {e}", extra={"request_id": request_id})
        finish("error")
        raise _error(503, e.user_message)

    finish("success", customer.id)
    return LoginResponse(
        customer_id=customer.id,
        customer_name=customer.name,
        dashboard_url=f"/dashboard/{customer.id}",
    )

"""FastAPI routes for the hosted payment page flow.

Mounted under ``/api/payments``: session initialization, assertion and
capture for the merchant front end, the three browser return paths, the
gateway notification endpoint and receipt lookup.
"""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse, RedirectResponse

from paygate.api.schemas import (
    AssertPaymentRequest,
    AssertPaymentResponse,
    CapturePaymentRequest,
    CapturePaymentResponse,
    ErrorResponse,
    InitPaymentRequest,
    InitPaymentResponse,
    ReceiptResponse,
)
from paygate.errors import ValidationError
from paygate.payment.assertion import PaymentAssertion
from paygate.payment.capture import CaptureOrchestrator
from paygate.payment.initiation import PaymentInitializer
from paygate.payment.returns import ReturnKind, ReturnResolver
from paygate.payment.webhook import WebhookReconciler
from paygate.receipt.lookup import TransactionLookup

logger = structlog.get_logger(__name__)

_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _require(value: Any, message: str) -> None:
    if value is None or value == "" or value == 0:
        raise ValidationError(message)


# ---------------------------------------------------------------------------
# Component access
# ---------------------------------------------------------------------------
def get_initializer(request: Request) -> PaymentInitializer:
    return request.app.state.initializer


def get_assertion(request: Request) -> PaymentAssertion:
    return request.app.state.assertion


def get_capture(request: Request) -> CaptureOrchestrator:
    return request.app.state.capture


def get_resolver(request: Request) -> ReturnResolver:
    return request.app.state.resolver


def get_reconciler(request: Request) -> WebhookReconciler:
    return request.app.state.reconciler


def get_lookup(request: Request) -> TransactionLookup:
    return request.app.state.lookup


# ---------------------------------------------------------------------------
# Payment Router
# ---------------------------------------------------------------------------
payment_router = APIRouter(prefix="/api/payments", tags=["payments"])


@payment_router.post("/init", response_model=InitPaymentResponse, responses=_ERRORS)
async def init_payment(
    body: InitPaymentRequest,
    initializer: PaymentInitializer = Depends(get_initializer),
) -> InitPaymentResponse:
    """Open a hosted payment page session."""
    _require(body.amount, "Amount is required")
    outcome = await initializer.initialize(body.amount, body.currency)
    return InitPaymentResponse(
        token=outcome.token,
        redirect_url=outcome.redirect_url,
        expiration=outcome.expiration,
    )


@payment_router.post("/assert", response_model=AssertPaymentResponse, responses=_ERRORS)
async def assert_payment(
    body: AssertPaymentRequest,
    assertion: PaymentAssertion = Depends(get_assertion),
) -> AssertPaymentResponse:
    """Report how the payer's hosted page flow ended."""
    _require(body.token, "Token is required")
    outcome = await assertion.assert_payment(body.token)
    return AssertPaymentResponse(
        success=outcome.success,
        status=outcome.status,
        message=outcome.message,
        transaction=outcome.transaction,
    )


@payment_router.post(
    "/capture",
    response_model=CapturePaymentResponse,
    response_model_exclude_none=True,
    responses=_ERRORS,
)
async def capture_payment(
    body: CapturePaymentRequest,
    orchestrator: CaptureOrchestrator = Depends(get_capture),
) -> CapturePaymentResponse:
    """Capture an authorized transaction and record its receipt."""
    _require(body.transaction_id, "TransactionId is required")
    outcome = await orchestrator.capture(body.transaction_id, body.amount)
    return CapturePaymentResponse(
        transaction_id=outcome.transaction_id,
        capture=outcome.capture,
        redirect_url=outcome.redirect_url,
    )


@payment_router.get("/return/{kind}", response_class=RedirectResponse, status_code=302)
async def payment_return(
    kind: ReturnKind,
    request: Request,
    resolver: ReturnResolver = Depends(get_resolver),
) -> RedirectResponse:
    """Send the returning payer to the page matching the outcome."""
    params = dict(request.query_params)
    logger.info("payment_return_received", kind=kind.value, url=str(request.url), parameters=params)
    decision = resolver.resolve(kind, params)
    return RedirectResponse(decision.redirect_url, status_code=302)


@payment_router.post("/notification", response_class=PlainTextResponse)
async def payment_notification(
    request: Request,
    reconciler: WebhookReconciler = Depends(get_reconciler),
) -> PlainTextResponse:
    """Acknowledge a gateway notification; failures are only logged."""
    try:
        body = await request.json()
    except ValueError:
        logger.warning("notification_body_unreadable", body=(await request.body())[:500])
        body = None

    logger.info("notification_received", body=body)
    if body is not None:
        reconciler.reconcile(body)
    return PlainTextResponse("OK", status_code=200)


@payment_router.get(
    "/transaction/{transaction_id}",
    response_model=ReceiptResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_transaction(
    transaction_id: str,
    lookup: TransactionLookup = Depends(get_lookup),
) -> ReceiptResponse:
    """Return the recorded receipt for a transaction."""
    receipt = lookup.get(transaction_id)
    return ReceiptResponse(**receipt.to_dict())

"""paygate FastAPI application.

Wires settings, the gateway adapter and the in-memory stores into the
payment components and exposes them over HTTP.

Usage:
    uvicorn paygate.app:app --host 0.0.0.0 --port 5000 --reload
"""

from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from paygate.api.routes import payment_router
from paygate.config import Settings
from paygate.errors import GatewayError, MalformedResponseError, NotFoundError, ValidationError
from paygate.gateway import build_gateway
from paygate.gateway.port import PaymentGateway
from paygate.payment.assertion import PaymentAssertion
from paygate.payment.capture import CaptureOrchestrator
from paygate.payment.initiation import PaymentInitializer
from paygate.payment.returns import ReturnResolver
from paygate.payment.webhook import WebhookReconciler
from paygate.receipt.ledger import ReceiptLedger
from paygate.receipt.lookup import TransactionLookup
from paygate.session.store import SessionStore
from paygate.utils.logging import add_context, clear_context, configure_logging

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------
async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    logger.info("request_rejected", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def _gateway_error(request: Request, exc: GatewayError | MalformedResponseError) -> JSONResponse:
    logger.error(
        "gateway_request_failed",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        body=exc.body,
    )
    return JSONResponse(status_code=500, content={"error": str(exc), "details": exc.body})


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------
def create_app(
    settings: Settings | None = None,
    gateway: PaymentGateway | None = None,
    sessions: SessionStore | None = None,
    receipts: ReceiptLedger | None = None,
) -> FastAPI:
    """Build the application around explicitly owned components."""
    settings = settings or Settings.from_env()
    gateway = gateway or build_gateway(settings)
    sessions = sessions if sessions is not None else SessionStore()
    receipts = receipts if receipts is not None else ReceiptLedger()

    app = FastAPI(
        title="paygate",
        description="Hosted payment page orchestration and outcome reconciliation",
    )

    app.state.settings = settings
    app.state.gateway = gateway
    app.state.sessions = sessions
    app.state.receipts = receipts
    app.state.initializer = PaymentInitializer(settings, gateway, sessions)
    app.state.assertion = PaymentAssertion(gateway)
    app.state.capture = CaptureOrchestrator(settings, gateway, receipts)
    app.state.resolver = ReturnResolver(sessions)
    app.state.reconciler = WebhookReconciler(receipts)
    app.state.lookup = TransactionLookup(receipts)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def logging_context_middleware(request: Request, call_next):
        """Tag every log line of a request with a request id."""
        clear_context()
        add_context(request_id=request.headers.get("X-Request-ID") or uuid4().hex, path=request.url.path)
        try:
            return await call_next(request)
        finally:
            clear_context()

    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(NotFoundError, _not_found)
    app.add_exception_handler(GatewayError, _gateway_error)
    app.add_exception_handler(MalformedResponseError, _gateway_error)

    app.include_router(payment_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "gateway": type(gateway).__name__})

    logger.info("app_created", gateway=type(gateway).__name__, env=settings.env)
    return app


def _build_default_app() -> FastAPI:
    configure_logging()
    return create_app()


app = _build_default_app()

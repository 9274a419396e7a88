"""Capture orchestration — settles an authorized transaction.

Calls the gateway capture and records the outcome in the receipt ledger
under the canonical transaction id. The canonical id is the first non-empty
of: the gateway's transaction id, the capture's transaction id, the id the
caller asked to capture.
"""

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlencode

import structlog

from paygate.config import Settings
from paygate.gateway.port import CaptureResult, PaymentGateway
from paygate.receipt.ledger import ReceiptLedger

logger = structlog.get_logger(__name__)

CAPTURED = "CAPTURED"
RECEIPT_PAGE = "/receipt.html"


@dataclass(frozen=True)
class CaptureOutcome:
    transaction_id: str | None
    redirect_url: str | None
    capture: dict[str, Any]


def resolve_transaction_id(result: CaptureResult, requested_id: str | None) -> str | None:
    for candidate in (result.transaction_id, result.capture_transaction_id, requested_id):
        if candidate:
            return candidate
    return None


def receipt_url(transaction_id: str) -> str:
    return f"{RECEIPT_PAGE}?{urlencode({'transactionId': transaction_id})}"


class CaptureOrchestrator:
    def __init__(self, settings: Settings, gateway: PaymentGateway, receipts: ReceiptLedger) -> None:
        self.settings = settings
        self.gateway = gateway
        self.receipts = receipts

    async def capture(self, transaction_id: str | None, amount: Any = None) -> CaptureOutcome:
        currency = self.settings.default_currency
        result = await self.gateway.capture(transaction_id, amount, currency)

        resolved_id = resolve_transaction_id(result, transaction_id)
        if not resolved_id:
            logger.warning(
                "capture_unanchored",
                requested_transaction_id=transaction_id,
                status=result.status,
            )
            return CaptureOutcome(transaction_id=None, redirect_url=None, capture=result.raw)

        self.receipts.upsert(
            resolved_id,
            status=result.status or CAPTURED,
            amount=amount,
            currency=currency,
            method=result.brand,
            date=result.date,
        )
        logger.info(
            "payment_captured",
            transaction_id=resolved_id,
            requested_transaction_id=transaction_id,
            status=result.status or CAPTURED,
        )
        return CaptureOutcome(
            transaction_id=resolved_id,
            redirect_url=receipt_url(resolved_id),
            capture=result.raw,
        )

"""Gateway notification reconciliation.

Notifications arrive independently of the payer's browser and of merchant
capture calls, possibly more than once. Each one carrying a transaction id
overwrites that transaction's receipt. Nothing here ever raises: the gateway
only needs to learn that the notification was received.
"""

from typing import Any

import structlog

from paygate.gateway.parsing import text_or_none
from paygate.receipt.ledger import Receipt, ReceiptLedger

logger = structlog.get_logger(__name__)


def _section(data: Any, key: str) -> dict[str, Any]:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


class WebhookReconciler:
    def __init__(self, receipts: ReceiptLedger) -> None:
        self.receipts = receipts

    def reconcile(self, body: Any) -> Receipt | None:
        """Upsert the receipt described by ``body``; None when unusable."""
        try:
            return self._reconcile(body)
        except Exception:
            logger.exception("notification_processing_failed")
            return None

    def _reconcile(self, body: Any) -> Receipt | None:
        transaction = _section(body, "Transaction")
        transaction_id = transaction.get("Id")
        if not transaction_id:
            logger.warning("notification_without_transaction", body=body)
            return None

        amount = _section(transaction, "Amount")
        brand = _section(_section(body, "PaymentMeans"), "Brand")
        receipt = self.receipts.upsert(
            str(transaction_id),
            status=text_or_none(transaction.get("Status")),
            amount=amount.get("Value"),
            currency=text_or_none(amount.get("CurrencyCode")),
            method=text_or_none(brand.get("Name")),
            date=text_or_none(transaction.get("Date")),
        )
        logger.info("notification_reconciled", transaction_id=receipt.transaction_id, status=receipt.status)
        return receipt

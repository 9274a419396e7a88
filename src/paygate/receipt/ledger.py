"""Receipt ledger — transaction id to the last known settlement record.

Written by the capture orchestrator and the webhook reconciler. Every write
replaces the whole record (last write wins), so replaying the same payload is
a no-op and concurrent writers never interleave field by field.
"""

import threading
from dataclasses import asdict, dataclass, replace
from datetime import UTC, datetime
from typing import Any

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_METHOD = "Card"


def utc_now_iso() -> str:
    """Current time as an ISO-8601 UTC string with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Receipt:
    """Recorded outcome of one gateway transaction."""

    transaction_id: str
    status: str | None
    amount: Any = None
    currency: str | None = None
    method: str = DEFAULT_METHOD
    date: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Public representation, without the ledger key."""
        data = asdict(self)
        data.pop("transaction_id")
        return data


class ReceiptLedger:
    """In-memory receipt ledger. Entries are retained for the process lifetime."""

    def __init__(self) -> None:
        self._receipts: dict[str, Receipt] = {}
        self._lock = threading.Lock()

    def upsert(
        self,
        transaction_id: str,
        *,
        status: str | None,
        amount: Any = None,
        currency: str | None = None,
        method: str | None = None,
        date: str | None = None,
    ) -> Receipt:
        """Write the receipt for ``transaction_id``, replacing any previous one.

        Without a gateway date the write time is recorded, except when the
        write repeats the stored record exactly; the replay then keeps the
        stored date.
        """
        receipt = Receipt(
            transaction_id=transaction_id,
            status=status,
            amount=amount,
            currency=currency,
            method=method or DEFAULT_METHOD,
            date=date or "",
        )
        with self._lock:
            previous = self._receipts.get(transaction_id)
            if not receipt.date:
                if previous is not None and replace(previous, date="") == receipt:
                    receipt = previous
                else:
                    receipt = replace(receipt, date=utc_now_iso())
            self._receipts[transaction_id] = receipt

        logger.info(
            "receipt_written",
            transaction_id=transaction_id,
            status=status,
            previous_status=previous.status if previous else None,
        )
        return receipt

    def get(self, transaction_id: str) -> Receipt | None:
        with self._lock:
            return self._receipts.get(transaction_id)

    def __contains__(self, transaction_id: object) -> bool:
        with self._lock:
            return transaction_id in self._receipts

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)

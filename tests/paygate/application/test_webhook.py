"""Application tests for gateway notification reconciliation."""

import pytest
from paygate.payment.webhook import WebhookReconciler


@pytest.fixture()
def reconciler(receipts):
    return WebhookReconciler(receipts)


def _notification(**transaction):
    return {
        "Transaction": {
            "Id": "X9",
            "Status": "CAPTURED",
            "Amount": {"Value": "1000", "CurrencyCode": "EUR"},
            **transaction,
        },
        "PaymentMeans": {"Brand": {"Name": "Mastercard"}},
    }


class TestReconcile:
    def test_notification_writes_receipt(self, reconciler, receipts):
        reconciler.reconcile(_notification(Date="2026-10-18T10:00:00Z"))

        receipt = receipts.get("X9")
        assert receipt.status == "CAPTURED"
        assert receipt.amount == "1000"
        assert receipt.currency == "EUR"
        assert receipt.method == "Mastercard"
        assert receipt.date == "2026-10-18T10:00:00Z"

    def test_minimal_notification_uses_defaults(self, reconciler, receipts):
        reconciler.reconcile({"Transaction": {"Id": "X9", "Status": "CAPTURED"}})

        receipt = receipts.get("X9")
        assert receipt.method == "Card"
        assert receipt.amount is None
        assert receipt.date

    def test_replayed_notification_is_idempotent(self, reconciler, receipts):
        reconciler.reconcile(_notification())
        once = receipts.get("X9")
        reconciler.reconcile(_notification())
        assert receipts.get("X9") == once

    def test_later_notification_overrides_capture(self, reconciler, receipts):
        receipts.upsert("X9", status="CAPTURED", amount=1000, currency="EUR")
        reconciler.reconcile(_notification(Status="REFUNDED"))
        assert receipts.get("X9").status == "REFUNDED"

    def test_non_string_fields_are_stored_as_text(self, reconciler, receipts):
        reconciler.reconcile(
            {
                "Transaction": {
                    "Id": 42,
                    "Status": 5,
                    "Date": 1760000000,
                    "Amount": {"Value": 1000, "CurrencyCode": 978},
                },
                "PaymentMeans": {"Brand": {"Name": 7}},
            }
        )

        receipt = receipts.get("42")
        assert receipt.status == "5"
        assert receipt.date == "1760000000"
        assert receipt.currency == "978"
        assert receipt.method == "7"
        assert receipt.amount == 1000


class TestUnusableBodies:
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"Transaction": {}},
            {"Transaction": {"Status": "CAPTURED"}},
            {"Transaction": "X9"},
            ["not", "an", "object"],
            "text",
            None,
        ],
    )
    def test_ignored_without_error(self, reconciler, receipts, body):
        assert reconciler.reconcile(body) is None
        assert len(receipts) == 0

    def test_internal_failure_is_swallowed(self, receipts):
        class BrokenLedger:
            def upsert(self, *args, **kwargs):
                raise RuntimeError("ledger unavailable")

        reconciler = WebhookReconciler(BrokenLedger())
        assert reconciler.reconcile(_notification()) is None

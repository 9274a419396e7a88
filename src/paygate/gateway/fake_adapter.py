"""Configurable fake payment gateway for development and testing.

This adapter simulates the hosted payment page API without any external
calls. It builds gateway-shaped payloads and runs them through the same
parse boundary as the HTTP adapter, so it can be configured to succeed,
fail, or answer with a malformed payload.
"""

import json
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from paygate.gateway.parsing import parse_assert, parse_capture, parse_initialize, unwrap
from paygate.gateway.port import (
    AssertResult,
    CaptureResult,
    GatewayFailure,
    GatewayMalformed,
    GatewayResponse,
    GatewaySuccess,
    InitializeResult,
    PaymentGateway,
    ReturnUrls,
)

FAKE_PAGE_URL = "https://fake-gateway.local/vt2/api/PaymentPage"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.malformed: bool = False
        self.failure_reason: str = "Card declined"
        self.assert_status: str = "AUTHORIZED"
        self.brand: str = "VISA"
        self.calls: list[dict] = []

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Card declined",
        assert_status: str = "AUTHORIZED",
        malformed: bool = False,
    ) -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.assert_status = assert_status
        self.malformed = malformed

    def _respond(self, payload: dict[str, Any]) -> GatewayResponse:
        if not self.should_succeed:
            body = json.dumps({"ErrorName": "TRANSACTION_DECLINED", "ErrorMessage": self.failure_reason})
            return GatewayFailure(raw_body=body, status_code=402, reason="Gateway API error (HTTP 402)")
        if self.malformed:
            return GatewayMalformed(raw_body="<html>maintenance</html>")
        return GatewaySuccess(payload=payload)

    async def initialize(
        self,
        amount: Any,
        currency: str,
        order_id: str,
        return_urls: ReturnUrls,
    ) -> InitializeResult:
        self.calls.append(
            {
                "method": "initialize",
                "amount": amount,
                "currency": currency,
                "order_id": order_id,
                "return_urls": return_urls,
            }
        )
        token = f"fake_tok_{uuid4().hex}"
        payload = {
            "Token": token,
            "Expiration": datetime.now(UTC).replace(microsecond=0).isoformat(),
            "RedirectUrl": f"{FAKE_PAGE_URL}/{token}",
        }
        return parse_initialize(unwrap(self._respond(payload)))

    async def assert_payment(self, token: str) -> AssertResult:
        self.calls.append({"method": "assert_payment", "token": token})
        payload = {
            "Transaction": {
                "Type": "PAYMENT",
                "Status": self.assert_status,
                "Id": f"fake_txn_{token[-12:]}",
                "Date": datetime.now(UTC).isoformat(),
            },
            "PaymentMeans": {"Brand": {"Name": self.brand}},
        }
        return parse_assert(unwrap(self._respond(payload)))

    async def capture(self, transaction_id: str, amount: Any, currency: str) -> CaptureResult:
        self.calls.append(
            {
                "method": "capture",
                "transaction_id": transaction_id,
                "amount": amount,
                "currency": currency,
            }
        )
        payload = {
            "CaptureId": f"{transaction_id}_c",
            "Status": "CAPTURED",
            "Date": datetime.now(UTC).isoformat(),
        }
        return parse_capture(unwrap(self._respond(payload)))

"""HTTP payment gateway adapter.

Talks to a Saferpay-style JSON API: hosted payment page Initialize and
Assert, and transaction Capture. Each request carries the protocol version
and a fresh RequestId; the gateway uses the RequestId to detect retried
requests, so it is never reused. No retries happen here.
"""

from typing import Any
from uuid import uuid4

import httpx
import structlog

from paygate.config import Settings
from paygate.gateway.parsing import classify, parse_assert, parse_capture, parse_initialize, unwrap
from paygate.gateway.port import (
    AssertResult,
    CaptureResult,
    GatewayFailure,
    GatewayResponse,
    InitializeResult,
    PaymentGateway,
    ReturnUrls,
)
from paygate.utils.logging import token_preview

logger = structlog.get_logger(__name__)

INITIALIZE_PATH = "/Payment/v1/PaymentPage/Initialize"
ASSERT_PATH = "/Payment/v1/PaymentPage/Assert"
CAPTURE_PATH = "/Payment/v1/Transaction/Capture"


class HttpGateway(PaymentGateway):
    """Production gateway adapter over httpx."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self._transport = transport

    def _request_header(self) -> dict[str, Any]:
        return {
            "SpecVersion": self.settings.spec_version,
            "CustomerId": self.settings.customer_id,
            "RequestId": str(uuid4()),
            "RetryIndicator": 0,
        }

    async def _post(self, path: str, body: dict[str, Any]) -> GatewayResponse:
        url = f"{self.settings.api_base_url}{path}"
        request_id = body["RequestHeader"]["RequestId"]
        try:
            async with httpx.AsyncClient(
                timeout=self.settings.gateway_timeout,
                auth=(self.settings.username, self.settings.password),
                transport=self._transport,
            ) as client:
                response = await client.post(
                    url,
                    json=body,
                    headers={"Accept": "application/json"},
                )
        except httpx.HTTPError as exc:
            logger.error("gateway_transport_error", path=path, request_id=request_id, error=str(exc))
            return GatewayFailure(raw_body="", reason=f"Gateway unreachable: {exc}")

        logger.debug(
            "gateway_response",
            path=path,
            request_id=request_id,
            status_code=response.status_code,
            body=response.text,
        )
        result = classify(response.status_code, response.text)
        if isinstance(result, GatewayFailure):
            logger.error(
                "gateway_api_error",
                path=path,
                request_id=request_id,
                status_code=response.status_code,
                body=response.text,
            )
        return result

    async def initialize(
        self,
        amount: Any,
        currency: str,
        order_id: str,
        return_urls: ReturnUrls,
    ) -> InitializeResult:
        body = {
            "RequestHeader": self._request_header(),
            "TerminalId": self.settings.terminal_id,
            "Payment": {
                "Amount": {"Value": str(amount), "CurrencyCode": currency},
                "OrderId": order_id,
                "Description": f"{currency} Payment",
            },
            "ReturnUrls": {
                "Success": return_urls.success,
                "Fail": return_urls.fail,
                "Abort": return_urls.abort,
            },
        }
        result = parse_initialize(unwrap(await self._post(INITIALIZE_PATH, body)))
        logger.info("gateway_initialized", order_id=order_id, token=token_preview(result.token))
        return result

    async def assert_payment(self, token: str) -> AssertResult:
        body = {
            "RequestHeader": self._request_header(),
            "Token": token,
        }
        result = parse_assert(unwrap(await self._post(ASSERT_PATH, body)))
        logger.info("gateway_asserted", token=token_preview(token), status=result.status)
        return result

    async def capture(self, transaction_id: str, amount: Any, currency: str) -> CaptureResult:
        body = {
            "RequestHeader": self._request_header(),
            "TransactionReference": {"TransactionId": transaction_id},
        }
        # Without an amount the gateway captures the full authorized amount.
        if amount is not None:
            body["Amount"] = {"Value": str(amount), "CurrencyCode": currency}
        result = parse_capture(unwrap(await self._post(CAPTURE_PATH, body)))
        logger.info("gateway_captured", transaction_id=transaction_id, status=result.status)
        return result

"""Parse boundary for gateway responses.

``classify`` turns a raw HTTP exchange into a tagged variant; ``unwrap``
raises for the failure variants; the ``parse_*`` functions validate the
required fields of each operation exactly once.
"""

import json
from typing import Any

from paygate.errors import GatewayError, MalformedResponseError
from paygate.gateway.port import (
    AssertResult,
    CaptureResult,
    GatewayFailure,
    GatewayMalformed,
    GatewayResponse,
    GatewaySuccess,
    InitializeResult,
)


def classify(status_code: int, body: str) -> GatewayResponse:
    """Classify a gateway HTTP response."""
    if not 200 <= status_code < 300:
        return GatewayFailure(
            raw_body=body,
            status_code=status_code,
            reason=f"Gateway API error (HTTP {status_code})",
        )
    try:
        payload = json.loads(body)
    except ValueError:
        return GatewayMalformed(raw_body=body)
    if not isinstance(payload, dict):
        return GatewayMalformed(raw_body=body, reason="Unexpected response structure from gateway")
    return GatewaySuccess(payload=payload)


def unwrap(response: GatewayResponse) -> dict[str, Any]:
    """Return the payload of a success, raise for anything else."""
    if isinstance(response, GatewaySuccess):
        return response.payload
    if isinstance(response, GatewayFailure):
        raise GatewayError(response.reason, body=response.raw_body, status_code=response.status_code)
    if isinstance(response, GatewayMalformed):
        raise MalformedResponseError(response.reason, body=response.raw_body)
    raise TypeError(f"Unknown gateway response: {response!r}")


def _dict(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def text_or_none(value: Any) -> str | None:
    """Gateway scalar as a string; None and empty strings become None."""
    if value is None or value == "":
        return None
    return str(value)


def _malformed(reason: str, payload: dict[str, Any]) -> MalformedResponseError:
    return MalformedResponseError(reason, body=json.dumps(payload))


def parse_initialize(payload: dict[str, Any]) -> InitializeResult:
    token = text_or_none(payload.get("Token"))
    redirect = _dict(payload.get("Redirect")) or {}
    redirect_url = text_or_none(payload.get("RedirectUrl")) or text_or_none(redirect.get("RedirectUrl"))
    if not token or not redirect_url:
        raise _malformed("Invalid response structure from gateway: Token and RedirectUrl are required", payload)
    return InitializeResult(
        token=token,
        redirect_url=redirect_url,
        expiration=text_or_none(payload.get("Expiration")),
        raw=payload,
    )


def parse_assert(payload: dict[str, Any]) -> AssertResult:
    transaction = _dict(payload.get("Transaction"))
    if transaction is None:
        raise _malformed("Invalid response structure from gateway: Transaction is required", payload)
    return AssertResult(
        status=text_or_none(transaction.get("Status")),
        transaction=transaction,
        raw=payload,
    )


def parse_capture(payload: dict[str, Any]) -> CaptureResult:
    transaction = _dict(payload.get("Transaction"))
    capture = _dict(payload.get("Capture"))
    if transaction is None and capture is None and not payload.get("CaptureId") and not payload.get("Status"):
        raise _malformed("Invalid response structure from gateway: no capture outcome", payload)

    transaction = transaction or {}
    capture = capture or {}
    brand = (_dict(payload.get("PaymentMeans")) or {}).get("Brand")
    return CaptureResult(
        transaction_id=text_or_none(transaction.get("Id")),
        capture_transaction_id=text_or_none(capture.get("TransactionId")),
        status=text_or_none(transaction.get("Status")) or text_or_none(payload.get("Status")),
        brand=text_or_none((_dict(brand) or {}).get("Name")),
        date=text_or_none(transaction.get("Date")) or text_or_none(payload.get("Date")),
        raw=payload,
    )

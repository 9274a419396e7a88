"""Payment gateway port (abstract interface).

Defines the contract that all gateway adapters implement, plus the typed
results they return. Application code programs against this port; the HTTP
adapter and the fake adapter are swapped via configuration.

Every raw exchange is classified once, at the parse boundary, into one of
``GatewaySuccess``, ``GatewayFailure`` or ``GatewayMalformed``. Adapters turn
failures into ``GatewayError`` and malformed payloads into
``MalformedResponseError``; callers only ever see typed results.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ReturnUrls:
    """Where the hosted page sends the payer back to."""

    success: str
    fail: str
    abort: str


# ---------------------------------------------------------------------------
# Raw exchange variants
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GatewaySuccess:
    payload: dict[str, Any]


@dataclass(frozen=True)
class GatewayFailure:
    raw_body: str
    status_code: int | None = None
    reason: str = "Gateway request failed"


@dataclass(frozen=True)
class GatewayMalformed:
    raw_body: str
    reason: str = "Invalid response from gateway"


GatewayResponse = GatewaySuccess | GatewayFailure | GatewayMalformed


# ---------------------------------------------------------------------------
# Operation results
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class InitializeResult:
    """Result of opening a hosted payment page session."""

    token: str
    redirect_url: str
    expiration: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AssertResult:
    """Authorization outcome of a completed hosted page flow."""

    status: str | None
    transaction: dict[str, Any]
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CaptureResult:
    """Settlement outcome of a capture call."""

    transaction_id: str | None = None
    capture_transaction_id: str | None = None
    status: str | None = None
    brand: str | None = None
    date: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    async def initialize(
        self,
        amount: Any,
        currency: str,
        order_id: str,
        return_urls: ReturnUrls,
    ) -> InitializeResult:
        """Open a hosted payment page session."""
        ...

    @abstractmethod
    async def assert_payment(self, token: str) -> AssertResult:
        """Report the authorization outcome for a session token."""
        ...

    @abstractmethod
    async def capture(
        self,
        transaction_id: str,
        amount: Any,
        currency: str,
    ) -> CaptureResult:
        """Finalize settlement of an authorized transaction."""
        ...

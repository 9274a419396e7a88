"""Payment assertion — asks the gateway how a hosted page flow ended."""

from dataclasses import dataclass
from typing import Any

import structlog

from paygate.gateway.port import PaymentGateway
from paygate.utils.logging import token_preview

logger = structlog.get_logger(__name__)

AUTHORIZED = "AUTHORIZED"
PENDING = "PENDING"

_MESSAGES = {
    AUTHORIZED: "Payment authorized",
    PENDING: "Waiting for bank transfer",
}


@dataclass(frozen=True)
class AssertOutcome:
    success: bool
    status: str | None
    message: str
    transaction: dict[str, Any]


class PaymentAssertion:
    def __init__(self, gateway: PaymentGateway) -> None:
        self.gateway = gateway

    async def assert_payment(self, token: str) -> AssertOutcome:
        result = await self.gateway.assert_payment(token)
        success = result.status in _MESSAGES
        outcome = AssertOutcome(
            success=success,
            status=result.status,
            message=_MESSAGES.get(result.status, "Payment not successful"),
            transaction=result.transaction,
        )

        log = logger.info if success else logger.warning
        log("payment_asserted", token=token_preview(token), status=result.status)
        return outcome

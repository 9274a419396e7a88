"""Payment initiation — opens a hosted payment page session.

Generates the order id, asks the gateway for a session and records the issued
token in the session store. Nothing is stored when the gateway call fails.
"""

import time
from dataclasses import dataclass
from typing import Any
from uuid import uuid4

import structlog

from paygate.config import Settings
from paygate.gateway.port import PaymentGateway, ReturnUrls
from paygate.session.store import SessionStore
from paygate.utils.logging import token_preview

logger = structlog.get_logger(__name__)


def generate_order_id() -> str:
    """Unique order id: creation time in milliseconds plus a random suffix."""
    return f"ORDER-{int(time.time() * 1000)}-{uuid4().hex[:8].upper()}"


@dataclass(frozen=True)
class InitOutcome:
    order_id: str
    token: str
    redirect_url: str
    expiration: str | None


class PaymentInitializer:
    def __init__(self, settings: Settings, gateway: PaymentGateway, sessions: SessionStore) -> None:
        self.settings = settings
        self.gateway = gateway
        self.sessions = sessions

    def return_urls(self, order_id: str) -> ReturnUrls:
        return ReturnUrls(
            success=self.settings.return_url("success", order_id),
            fail=self.settings.return_url("fail", order_id),
            abort=self.settings.return_url("abort", order_id),
        )

    async def initialize(self, amount: Any, currency: str | None = None) -> InitOutcome:
        order_id = generate_order_id()
        currency = currency or self.settings.default_currency

        result = await self.gateway.initialize(
            amount=amount,
            currency=currency,
            order_id=order_id,
            return_urls=self.return_urls(order_id),
        )
        self.sessions.put(order_id, result.token, result.expiration)

        logger.info(
            "payment_initialized",
            order_id=order_id,
            amount=amount,
            currency=currency,
            token=token_preview(result.token),
        )
        return InitOutcome(
            order_id=order_id,
            token=result.token,
            redirect_url=result.redirect_url,
            expiration=result.expiration,
        )

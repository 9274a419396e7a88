"""Browser return resolution.

The hosted payment page sends the payer back to one of three return paths.
The query carries either the token itself or the order id the session was
stored under. An order id consumes its session, so a replayed return for the
same order no longer resolves.

Resolution never fails the request: the payer's browser must land on some
page, so an unresolvable success return becomes a diagnostic error page and
unresolvable fail/abort returns go to their page without a token.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote, urlencode

import structlog

from paygate.session.store import SessionStore
from paygate.utils.logging import token_preview

logger = structlog.get_logger(__name__)

ERROR_PAGE = "/error.html"


class ReturnKind(str, Enum):
    SUCCESS = "success"
    FAIL = "fail"
    ABORT = "abort"

    @property
    def page(self) -> str:
        return f"/{self.value}.html"


@dataclass(frozen=True)
class ReturnDecision:
    redirect_url: str


def describe_parameters(params: Mapping[str, str]) -> str:
    """Diagnostic listing of every query parameter received."""
    message = "No token available. Available parameters: "
    for key, value in params.items():
        message += f"{key}={value}, "
    return message


class ReturnResolver:
    def __init__(self, sessions: SessionStore) -> None:
        self.sessions = sessions

    def resolve_token(self, params: Mapping[str, str]) -> str | None:
        token = params.get("token")
        if token:
            return token

        order_id = params.get("orderId")
        if order_id:
            session = self.sessions.take_by_order_id(order_id)
            if session is not None:
                return session.token
        return None

    def resolve(self, kind: ReturnKind, params: Mapping[str, str]) -> ReturnDecision:
        token = self.resolve_token(params)

        if token:
            logger.info("payment_return_resolved", kind=kind.value, token=token_preview(token))
            return ReturnDecision(redirect_url=f"{kind.page}?{urlencode({'token': token})}")

        if kind is ReturnKind.SUCCESS:
            logger.warning("payment_return_without_token", kind=kind.value, parameters=sorted(params))
            message = quote(describe_parameters(params), safe="")
            return ReturnDecision(redirect_url=f"{ERROR_PAGE}?message={message}")

        logger.info("payment_return_unresolved", kind=kind.value, parameters=sorted(params))
        return ReturnDecision(redirect_url=kind.page)

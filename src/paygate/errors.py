"""Exception taxonomy for the payment flow.

Store operations never raise; absence is a normal outcome. Everything else
surfaces one of these, and the HTTP layer maps each to a status code.
"""


class PaygateError(Exception):
    """Base class for all payment flow errors."""


class ValidationError(PaygateError):
    """A required input field is missing or unusable."""


class NotFoundError(PaygateError):
    """A lookup found nothing under the given key."""


class GatewayError(PaygateError):
    """The gateway could not be reached or answered with a non-success status."""

    def __init__(self, message: str, body: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.body = body
        self.status_code = status_code


class MalformedResponseError(PaygateError):
    """The gateway answered with success but the payload is unusable."""

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body

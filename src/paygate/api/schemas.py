"""Pydantic request/response schemas for the Payments API.

These are external contracts, so field names follow the camelCase JSON the
checkout front end sends and expects. Required fields are optional here and
checked by the routes, which answer with a plain ``{"error": ...}`` body.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Amount = int | float | str


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class InitPaymentRequest(_CamelModel):
    amount: Amount | None = None
    currency: str | None = Field(default=None, min_length=3, max_length=3)

    model_config = ConfigDict(populate_by_name=True, json_schema_extra={"examples": [{"amount": 1000}]})


class AssertPaymentRequest(_CamelModel):
    token: str | None = None


class CapturePaymentRequest(_CamelModel):
    transaction_id: str | None = Field(default=None, alias="transactionId")
    amount: Amount | None = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"examples": [{"transactionId": "723n4MAjMdhjSAhAKEUdA8jtl9jb", "amount": 1000}]},
    )


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ErrorResponse(BaseModel):
    error: str
    details: Any = None


class InitPaymentResponse(_CamelModel):
    success: bool = True
    token: str
    redirect_url: str = Field(alias="redirectUrl")
    expiration: str | None = None


class AssertPaymentResponse(_CamelModel):
    success: bool
    status: str | None
    message: str
    transaction: dict[str, Any]


class CapturePaymentResponse(_CamelModel):
    success: bool = True
    transaction_id: str | None = Field(default=None, alias="transactionId")
    capture: dict[str, Any] = Field(default_factory=dict)
    redirect_url: str | None = Field(default=None, alias="redirectUrl")


class ReceiptResponse(BaseModel):
    status: str | None
    amount: Any = None
    currency: str | None = None
    method: str
    date: str

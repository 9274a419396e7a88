"""Runtime configuration for the payment gateway integration.

Settings are an explicit value handed to component constructors. Only
``Settings.from_env()`` reads the process environment.
"""

import os

from pydantic import BaseModel, Field

DEFAULT_GATEWAY_BASE_URL = "https://test.saferpay.com/api"
DEFAULT_SPEC_VERSION = "1.31"


def _default_public_base_url() -> str:
    return f"http://localhost:{os.environ.get('PORT', '5000')}"


class Settings(BaseModel):
    """Gateway credentials, merchant identifiers and URL configuration."""

    model_config = {"frozen": True}

    gateway_base_url: str = DEFAULT_GATEWAY_BASE_URL
    customer_id: str = ""
    terminal_id: str = ""
    username: str = ""
    password: str = ""
    public_base_url: str = "http://localhost:5000"
    default_currency: str = Field(default="EUR", min_length=3, max_length=3)
    spec_version: str = DEFAULT_SPEC_VERSION
    gateway_timeout: float = Field(default=30.0, gt=0)
    gateway_adapter: str = "http"
    env: str = "development"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``PAYGATE_*`` environment variables."""
        env = os.environ
        return cls(
            gateway_base_url=env.get("PAYGATE_GATEWAY_BASE_URL", DEFAULT_GATEWAY_BASE_URL),
            customer_id=env.get("PAYGATE_CUSTOMER_ID", ""),
            terminal_id=env.get("PAYGATE_TERMINAL_ID", ""),
            username=env.get("PAYGATE_USERNAME", ""),
            password=env.get("PAYGATE_PASSWORD", ""),
            public_base_url=env.get("PAYGATE_PUBLIC_BASE_URL") or _default_public_base_url(),
            default_currency=env.get("PAYGATE_DEFAULT_CURRENCY", "EUR"),
            spec_version=env.get("PAYGATE_SPEC_VERSION", DEFAULT_SPEC_VERSION),
            gateway_timeout=float(env.get("PAYGATE_GATEWAY_TIMEOUT", "30")),
            gateway_adapter=env.get("PAYGATE_GATEWAY_ADAPTER", "http"),
            env=env.get("PAYGATE_ENV", "development"),
        )

    @property
    def api_base_url(self) -> str:
        """Gateway base URL without a trailing slash."""
        return self.gateway_base_url.rstrip("/")

    def return_url(self, kind: str, order_id: str) -> str:
        """Public URL the gateway sends the payer back to for ``kind``."""
        base = self.public_base_url.rstrip("/")
        return f"{base}/api/payments/return/{kind}?orderId={order_id}"

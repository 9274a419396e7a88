"""Payment gateway factory.

``build_gateway()`` picks the adapter named by the settings:
- HttpGateway for the real hosted payment page API
- FakeGateway for development and testing
"""

from paygate.config import Settings
from paygate.gateway.fake_adapter import FakeGateway
from paygate.gateway.http_adapter import HttpGateway
from paygate.gateway.port import PaymentGateway


def build_gateway(settings: Settings) -> PaymentGateway:
    """Return the gateway adapter configured by ``settings.gateway_adapter``."""
    adapter = settings.gateway_adapter.lower()
    if adapter == "http":
        return HttpGateway(settings)
    if adapter == "fake":
        return FakeGateway()
    raise ValueError(f"Unknown gateway adapter: {settings.gateway_adapter}")

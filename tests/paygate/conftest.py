import json

import httpx
import pytest
from paygate.config import Settings
from paygate.gateway.fake_adapter import FakeGateway
from paygate.receipt.ledger import ReceiptLedger
from paygate.session.store import SessionStore


@pytest.fixture()
def settings():
    return Settings(
        gateway_base_url="https://gateway.test/api",
        customer_id="245294",
        terminal_id="17925560",
        username="API_245294_08700063",
        password="secret",
        public_base_url="https://shop.example.com",
        default_currency="EUR",
        gateway_adapter="fake",
        env="test",
    )


@pytest.fixture()
def fake_gateway():
    return FakeGateway()


@pytest.fixture()
def sessions():
    return SessionStore()


@pytest.fixture()
def receipts():
    return ReceiptLedger()


class RecordingGatewayStub:
    """Scripted upstream gateway for ``httpx.MockTransport``.

    Responses are queued per path; every request is kept for inspection.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: dict[str, list[httpx.Response]] = {}

    def queue(self, path: str, status_code: int = 200, json_body=None, text: str | None = None):
        if text is None:
            text = json.dumps(json_body if json_body is not None else {})
        self.responses.setdefault(path, []).append(httpx.Response(status_code, text=text))

    def bodies(self) -> list[dict]:
        return [json.loads(request.content) for request in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        for path, queued in self.responses.items():
            if request.url.path.endswith(path) and queued:
                return queued.pop(0)
        return httpx.Response(404, text="no stub")


@pytest.fixture()
def gateway_stub():
    return RecordingGatewayStub()


@pytest.fixture()
def mock_transport(gateway_stub):
    return httpx.MockTransport(gateway_stub)

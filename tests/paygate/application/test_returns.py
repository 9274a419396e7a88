"""Application tests for browser return resolution."""

from urllib.parse import parse_qs, urlsplit

import pytest
from paygate.payment.returns import ReturnKind, ReturnResolver, describe_parameters


@pytest.fixture()
def resolver(sessions):
    return ReturnResolver(sessions)


def _query(url):
    return parse_qs(urlsplit(url).query)


class TestTokenInQuery:
    def test_direct_token_is_used(self, resolver):
        decision = resolver.resolve(ReturnKind.SUCCESS, {"token": "tok-1"})
        assert decision.redirect_url == "/success.html?token=tok-1"

    def test_direct_token_leaves_store_untouched(self, resolver, sessions):
        sessions.put("ORDER-1", "tok-stored")
        resolver.resolve(ReturnKind.SUCCESS, {"token": "tok-1", "orderId": "ORDER-1"})
        assert "ORDER-1" in sessions


class TestOrderIdResolution:
    def test_order_id_resolves_stored_token(self, resolver, sessions):
        sessions.put("ORDER-1", "tok-stored")
        decision = resolver.resolve(ReturnKind.SUCCESS, {"orderId": "ORDER-1"})
        assert _query(decision.redirect_url) == {"token": ["tok-stored"]}

    def test_order_id_is_consumed_once(self, resolver, sessions):
        sessions.put("ORDER-1", "tok-stored")
        first = resolver.resolve(ReturnKind.SUCCESS, {"orderId": "ORDER-1"})
        second = resolver.resolve(ReturnKind.SUCCESS, {"orderId": "ORDER-1"})
        assert first.redirect_url == "/success.html?token=tok-stored"
        assert second.redirect_url.startswith("/error.html?message=")

    @pytest.mark.parametrize("kind", [ReturnKind.FAIL, ReturnKind.ABORT])
    def test_fail_and_abort_carry_token(self, resolver, sessions, kind):
        sessions.put("ORDER-1", "tok-stored")
        decision = resolver.resolve(kind, {"orderId": "ORDER-1"})
        assert decision.redirect_url == f"/{kind.value}.html?token=tok-stored"
        assert "ORDER-1" not in sessions


class TestNotFound:
    def test_success_without_token_redirects_to_diagnostic(self, resolver):
        decision = resolver.resolve(ReturnKind.SUCCESS, {"orderId": "ORDER-unknown", "lang": "de"})

        assert urlsplit(decision.redirect_url).path == "/error.html"
        message = _query(decision.redirect_url)["message"][0]
        assert message == "No token available. Available parameters: orderId=ORDER-unknown, lang=de, "

    def test_diagnostic_is_url_encoded(self, resolver):
        decision = resolver.resolve(ReturnKind.SUCCESS, {"orderId": "A&B"})
        assert "A&B" not in decision.redirect_url
        assert "orderId%3DA%26B" in decision.redirect_url

    def test_success_without_any_parameter(self, resolver):
        decision = resolver.resolve(ReturnKind.SUCCESS, {})
        assert _query(decision.redirect_url)["message"] == ["No token available. Available parameters: "]

    @pytest.mark.parametrize("kind", [ReturnKind.FAIL, ReturnKind.ABORT])
    def test_fail_and_abort_degrade_silently(self, resolver, kind):
        decision = resolver.resolve(kind, {"orderId": "ORDER-unknown"})
        assert decision.redirect_url == f"/{kind.value}.html"


class TestDescribeParameters:
    def test_lists_every_parameter(self):
        assert describe_parameters({"a": "1", "b": "2"}) == "No token available. Available parameters: a=1, b=2, "

from decimal import Decimal
from types import SimpleNamespace

import jwt
import pytest
import requests

from foodorder.config import AppConfig
from foodorder.services import payment_gateway
from foodorder.services.payment_gateway import (
    HttpPaymentGateway,
    SimulatedPaymentGateway,
    build_payment_gateway,
)


class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("not json")
        return self._payload


@pytest.fixture
def http_gateway():
    return HttpPaymentGateway("https://pay.example.test/", "ak-123", "sk-456", timeout=3)


def _stub_post(monkeypatch, response=None, exc=None):
    calls = []

    def fake_post(url, json=None, headers=None, timeout=None):
        calls.append(SimpleNamespace(url=url, json=json, headers=headers, timeout=timeout))
        if exc is not None:
            raise exc
        return response

    monkeypatch.setattr(payment_gateway.requests, "post", fake_post)
    return calls


class TestSimulatedGateway:
    def test_approves_within_limit(self):
        auth = SimulatedPaymentGateway(Decimal("50")).authorize(Decimal("19.98"), "USD", "cart-1")

        assert auth.approved
        assert auth.reference == "sim-cart-1"

    def test_declines_over_limit(self):
        auth = SimulatedPaymentGateway(Decimal("10")).authorize(Decimal("19.98"), "USD", "cart-1")

        assert not auth.approved
        assert "exceeds approval limit" in auth.reason

    def test_declines_zero_amount(self):
        assert not SimulatedPaymentGateway().authorize(Decimal("0"), "USD", "cart-1").approved


class TestHttpGateway:
    def test_approved_charge(self, monkeypatch, http_gateway):
        calls = _stub_post(monkeypatch, FakeResponse(payload={"status": "approved", "id": "ch_1"}))

        auth = http_gateway.authorize(Decimal("19.98"), "USD", "cart-1")

        assert auth.approved
        assert auth.reference == "ch_1"
        call = calls[0]
        assert call.url == "https://pay.example.test/v1/charges"
        assert call.json == {"amount": "19.98", "currency": "USD", "reference": "cart-1"}
        assert call.timeout == 3
        token = call.headers["Authorization"].split(" ", 1)[1]
        claims = jwt.decode(token, "sk-456", algorithms=["HS256"])
        assert claims["iss"] == "ak-123"

    def test_declined_charge(self, monkeypatch, http_gateway):
        _stub_post(monkeypatch, FakeResponse(payload={"status": "declined", "reason": "card expired"}))

        auth = http_gateway.authorize(Decimal("5.00"), "USD", "cart-1")

        assert not auth.approved
        assert auth.reason == "card expired"

    def test_timeout(self, monkeypatch, http_gateway):
        _stub_post(monkeypatch, exc=requests.exceptions.Timeout())

        auth = http_gateway.authorize(Decimal("5.00"), "USD", "cart-1")

        assert not auth.approved
        assert auth.reason == "payment gateway timeout"

    def test_connection_error(self, monkeypatch, http_gateway):
        _stub_post(monkeypatch, exc=requests.exceptions.ConnectionError())

        assert http_gateway.authorize(Decimal("5.00"), "USD", "cart-1").reason == "payment gateway unreachable"

    def test_server_error(self, monkeypatch, http_gateway):
        _stub_post(monkeypatch, FakeResponse(status_code=503))

        assert http_gateway.authorize(Decimal("5.00"), "USD", "cart-1").reason == "payment gateway error 503"

    def test_garbage_body(self, monkeypatch, http_gateway):
        _stub_post(monkeypatch, FakeResponse(invalid_json=True))

        assert not http_gateway.authorize(Decimal("5.00"), "USD", "cart-1").approved

    def test_no_credentials_sends_no_token(self, monkeypatch):
        calls = _stub_post(monkeypatch, FakeResponse(payload={"status": "approved"}))

        HttpPaymentGateway("https://pay.example.test", "", "").authorize(Decimal("1"), "USD", "cart-1")

        assert "Authorization" not in calls[0].headers

    def test_requires_base_url(self):
        with pytest.raises(ValueError):
            HttpPaymentGateway("", "ak", "sk")


def _config(**overrides):
    fields = dict(database_url="sqlite://", secret_key="s", log_level="INFO", currency="USD")
    fields.update(overrides)
    return AppConfig(**fields)


def test_build_simulated_gateway():
    gateway = build_payment_gateway(_config(payment_approval_limit=Decimal("42")))

    assert isinstance(gateway, SimulatedPaymentGateway)
    assert gateway.approval_limit == Decimal("42")


def test_build_http_gateway():
    gateway = build_payment_gateway(
        _config(payment_gateway="http", payment_gateway_url="https://pay.example.test", payment_timeout=7)
    )

    assert isinstance(gateway, HttpPaymentGateway)
    assert gateway.timeout == 7

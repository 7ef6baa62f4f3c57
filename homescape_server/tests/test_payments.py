"""
Tests for POST /create-payment-intent. Stripe is never called for real.
"""
from unittest.mock import MagicMock, patch

import pytest
import stripe

from homescape_server.main import app
from homescape_server.payments import PaymentGateway, get_payment_gateway, price_to_cents


@pytest.fixture
def gateway():
    g = PaymentGateway("sk_test_dummy", "usd")
    app.dependency_overrides[get_payment_gateway] = lambda: g
    return g


@pytest.mark.parametrize("price, cents", [(1, 100), (19.99, 1999), (0.5, 50), (250.0, 25000)])
def test_price_to_cents(price, cents):
    assert price_to_cents(price) == cents


def test_payment_intent_returns_client_secret(client, auth_headers, gateway):
    intent = MagicMock(client_secret="pi_123_secret_456")
    with patch("homescape_server.payments.stripe.PaymentIntent.create", return_value=intent) as create:
        response = client.post("/create-payment-intent", json={"price": 19.99}, headers=auth_headers("a@x.com"))
    assert response.status_code == 200
    assert response.json() == {"clientSecret": "pi_123_secret_456"}
    create.assert_called_once_with(
        amount=1999,
        currency="usd",
        payment_method_types=["card"],
        api_key="sk_test_dummy",
    )


def test_payment_intent_needs_token(client, gateway):
    assert client.post("/create-payment-intent", json={"price": 10}).status_code == 401


@pytest.mark.parametrize("body", [{}, {"price": 0}, {"price": -5}, {"price": "abc"}])
def test_payment_intent_rejects_bad_price(client, auth_headers, gateway, body):
    response = client.post("/create-payment-intent", json=body, headers=auth_headers("a@x.com"))
    assert response.status_code == 422


def test_payment_intent_unconfigured_returns_503(client, auth_headers):
    app.dependency_overrides[get_payment_gateway] = lambda: PaymentGateway("", "usd")
    response = client.post("/create-payment-intent", json={"price": 10}, headers=auth_headers("a@x.com"))
    assert response.status_code == 503


def test_payment_provider_error_returns_502(client, auth_headers, gateway):
    with patch(
        "homescape_server.payments.stripe.PaymentIntent.create",
        side_effect=stripe.StripeError("card network down"),
    ):
        response = client.post("/create-payment-intent", json={"price": 10}, headers=auth_headers("a@x.com"))
    assert response.status_code == 502

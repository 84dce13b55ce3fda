import json

import httpx
import pytest

from components.account.policy import Plan
from components.billing.gateway import MercadoPagoGateway
from components.core.exceptions import PaymentGatewayError


def recording_transport(status_code=201, body=None):
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=body if body is not None else {})

    return httpx.MockTransport(handler), requests


def make_gateway(transport, token="TEST-token"):
    return MercadoPagoGateway(
        access_token=token,
        api_url="https://mp.test",
        app_url="https://studio.test/",
        transport=transport,
    )


async def test_missing_token_fails_without_calling_provider():
    transport, requests = recording_transport()
    gateway = make_gateway(transport, token="")

    with pytest.raises(PaymentGatewayError):
        await gateway.create_preference("premium", "ana@studio.com", "Ana")
    assert requests == []


@pytest.mark.parametrize("plan", ["free", "gold", "Premium"])
async def test_only_paid_plans_can_be_checked_out(plan):
    transport, requests = recording_transport()
    with pytest.raises(PaymentGatewayError):
        await make_gateway(transport).create_preference(plan, "ana@studio.com", "Ana")
    assert requests == []


async def test_successful_preference_returns_init_point():
    transport, requests = recording_transport(
        201, {"id": "pref-123", "init_point": "https://mp.test/checkout/pref-123"}
    )

    preference = await make_gateway(transport).create_preference("premium", "ana@studio.com", "Ana")

    assert preference.checkout_url == "https://mp.test/checkout/pref-123"
    assert preference.preference_id == "pref-123"

    assert len(requests) == 1
    request = requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://mp.test/checkout/preferences"
    assert request.headers["Authorization"] == "Bearer TEST-token"

    payload = json.loads(request.content)
    assert payload["items"] == [{
        "title": "Premium Plan - ProServ",
        "quantity": 1,
        "unit_price": 49.9,
        "currency_id": "BRL",
    }]
    assert payload["payer"] == {"email": "ana@studio.com", "name": "Ana"}
    assert payload["back_urls"]["success"] == "https://studio.test/?payment=success&plan=premium"
    assert payload["back_urls"]["failure"] == "https://studio.test/?payment=failure"
    assert payload["auto_return"] == "approved"
    assert json.loads(payload["external_reference"]) == {"plan": "premium", "user_email": "ana@studio.com"}
    assert payload["notification_url"] == "https://studio.test/webhook/mercadopago"


async def test_basic_plan_price():
    transport, _ = recording_transport()
    payload = make_gateway(transport).build_preference(Plan.BASIC, "ana@studio.com", "Ana")
    assert payload["items"][0]["title"] == "Basic Plan - ProServ"
    assert payload["items"][0]["unit_price"] == 29.9


async def test_provider_error_is_reported():
    transport, requests = recording_transport(400, {"message": "invalid access token"})

    with pytest.raises(PaymentGatewayError) as excinfo:
        await make_gateway(transport).create_preference("basic", "ana@studio.com", "Ana")

    assert "invalid access token" in excinfo.value.message
    assert len(requests) == 1


async def test_network_failure_is_reported():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PaymentGatewayError):
        await make_gateway(httpx.MockTransport(handler)).create_preference("basic", "ana@studio.com", "Ana")


@pytest.mark.parametrize("body", [{"id": "pref-1"}, {"init_point": "https://mp.test/x"}, []])
async def test_incomplete_success_response_is_reported(body):
    transport, _ = recording_transport(201, body)

    with pytest.raises(PaymentGatewayError):
        await make_gateway(transport).create_preference("premium", "ana@studio.com", "Ana")

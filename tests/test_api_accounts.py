import httpx
import pytest

from components.billing.gateway import MercadoPagoGateway


async def test_register_starts_on_free_plan(client):
    response = await client.post(
        "/auth/register",
        json={"email": "Novo@Studio.com", "full_name": "Novo Profissional", "password": "secret123"},
    )

    assert response.status_code == 200, response.text
    account = response.json()
    assert account["email"] == "novo@studio.com"
    assert account["plan"] == "free"
    assert account["role"] == "user"
    assert account["access_token"]

    again = await client.post(
        "/auth/register",
        json={"email": "novo@studio.com", "full_name": "Outro", "password": "secret123"},
    )
    assert again.status_code == 400


async def test_register_validates_email_and_password(client):
    bad_email = await client.post("/auth/register", json={"email": "nope", "password": "secret123"})
    short_password = await client.post("/auth/register", json={"email": "a@b.com", "password": "123"})
    assert bad_email.status_code == 422
    assert short_password.status_code == 422


async def test_login_and_profile(client, make_account, login):
    await make_account()
    headers = await login()

    me = await client.get("/auth/me", headers=headers)
    assert me.json()["email"] == "ana@studio.com"

    updated = await client.patch("/auth/me", json={"full_name": "Ana Maria"}, headers=headers)
    assert updated.json()["full_name"] == "Ana Maria"

    wrong = await client.post("/auth/login", data={"username": "ana@studio.com", "password": "bad"})
    assert wrong.status_code == 401


async def test_unknown_stored_plan_reads_as_free(client, make_account, login):
    await make_account(plan="gold")
    headers = await login()

    assert (await client.get("/auth/me", headers=headers)).json()["plan"] == "free"
    assert (await client.get("/transactions/", headers=headers)).status_code == 403


async def test_plan_catalogue_marks_current_and_downgrades(client, make_account, login):
    await make_account(plan="basic")
    headers = await login()

    plans = (await client.get("/plans/", headers=headers)).json()

    assert [plan["id"] for plan in plans] == ["free", "basic", "premium"]
    flags = {plan["id"]: (plan["is_current"], plan["is_downgrade"]) for plan in plans}
    assert flags == {"free": (False, True), "basic": (True, False), "premium": (False, False)}
    assert plans[2]["highlighted"] is True


async def test_selecting_current_plan_changes_nothing(client, make_account, login):
    await make_account(plan="basic")
    headers = await login()

    response = await client.post("/plans/checkout", json={"plan": "basic"}, headers=headers)

    assert response.json() == {"outcome": "unchanged", "plan": "basic", "checkout_url": None, "preference_id": None}


async def test_downgrade_to_free_is_immediate(client, make_account, login):
    await make_account(plan="premium")
    headers = await login()

    response = await client.post("/plans/checkout", json={"plan": "free"}, headers=headers)

    assert response.json()["outcome"] == "changed"
    assert (await client.get("/auth/me", headers=headers)).json()["plan"] == "free"


async def test_paid_plan_returns_checkout_url_without_changing_plan(client, make_account, login, use_gateway):
    def handler(request):
        return httpx.Response(201, json={"id": "pref-9", "init_point": "https://mp.test/pay/pref-9"})

    use_gateway(MercadoPagoGateway(access_token="TEST", transport=httpx.MockTransport(handler)))
    await make_account()
    headers = await login()

    response = await client.post("/plans/checkout", json={"plan": "premium"}, headers=headers)

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["outcome"] == "checkout"
    assert body["checkout_url"] == "https://mp.test/pay/pref-9"
    assert body["plan"] == "free"
    assert (await client.get("/auth/me", headers=headers)).json()["plan"] == "free"


async def test_checkout_without_payment_configuration_fails(client, make_account, login):
    await make_account()
    headers = await login()

    response = await client.post("/plans/checkout", json={"plan": "basic"}, headers=headers)

    assert response.status_code == 502
    assert "payment configuration" in response.json()["detail"]


@pytest.mark.parametrize("params, applied, plan", [
    ({"payment": "success", "plan": "premium"}, True, "premium"),
    ({"payment": "failure", "plan": "premium"}, False, "free"),
    ({"payment": "success", "plan": "gold"}, False, "free"),
    ({}, False, "free"),
])
async def test_payment_return(client, make_account, login, params, applied, plan):
    await make_account()
    headers = await login()

    response = await client.post("/plans/confirm", params=params, headers=headers)

    assert response.json() == {"applied": applied, "plan": plan}
    assert (await client.get("/auth/me", headers=headers)).json()["plan"] == plan


async def test_health_check(client):
    response = await client.get("/health_check/")
    assert response.status_code == 200
    body = response.json()
    assert body["service_name"] == "ProServ"
    assert body["status"] == "healthy"
    assert body["database"] == "ok"

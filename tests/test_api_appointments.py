from decimal import Decimal

import pytest


@pytest.fixture
async def headers(make_account, login):
    await make_account()
    return await login()


async def create_client(client, headers, name="Maria Lima"):
    response = await client.post("/clients/", json={"name": name, "phone": "11 99999-0000"}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


async def create_service(client, headers, name="Haircut", price="80.00", active=True):
    response = await client.post(
        "/services/",
        json={"name": name, "price": price, "duration": 45, "active": active},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


async def book(client, headers, client_id, service_id, day="2024-05-20", time="10:00"):
    return await client.post(
        "/appointments/",
        json={"client_id": client_id, "service_id": service_id, "date": day, "time": time},
        headers=headers,
    )


async def test_booking_snapshots_client_and_service(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)

    response = await book(client, headers, customer["id"], service["id"])

    assert response.status_code == 200, response.text
    appointment = response.json()
    assert appointment["status"] == "scheduled"
    assert appointment["client_name"] == "Maria Lima"
    assert appointment["service_name"] == "Haircut"
    assert Decimal(appointment["value"]) == Decimal("80")


async def test_repricing_a_service_does_not_change_booked_value(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    appointment = (await book(client, headers, customer["id"], service["id"])).json()

    response = await client.put(
        f"/services/{service['id']}",
        json={"name": "Premium haircut", "price": "120.00"},
        headers=headers,
    )
    assert response.status_code == 200

    stored = (await client.get(f"/appointments/{appointment['id']}", headers=headers)).json()
    assert Decimal(stored["value"]) == Decimal("80")
    assert stored["service_name"] == "Haircut"


async def test_deleting_client_keeps_appointment(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    appointment = (await book(client, headers, customer["id"], service["id"])).json()

    assert (await client.delete(f"/clients/{customer['id']}", headers=headers)).status_code == 200

    stored = await client.get(f"/appointments/{appointment['id']}", headers=headers)
    assert stored.status_code == 200
    assert stored.json()["client_name"] == "Maria Lima"


async def test_edit_takes_fresh_snapshot(client, headers):
    customer = await create_client(client, headers)
    other = await create_client(client, headers, name="Joana Reis")
    service = await create_service(client, headers)
    appointment = (await book(client, headers, customer["id"], service["id"])).json()
    await client.put(f"/services/{service['id']}", json={"price": "95.00"}, headers=headers)

    response = await client.put(
        f"/appointments/{appointment['id']}",
        json={"client_id": other["id"], "service_id": service["id"], "date": "2024-05-21", "time": "11:30"},
        headers=headers,
    )

    assert response.status_code == 200, response.text
    edited = response.json()
    assert edited["client_name"] == "Joana Reis"
    assert Decimal(edited["value"]) == Decimal("95")
    assert edited["date"] == "2024-05-21"
    assert edited["time"] == "11:30"


async def test_inactive_service_cannot_be_booked(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers, active=False)

    response = await book(client, headers, customer["id"], service["id"])

    assert response.status_code == 400


async def test_unknown_client_is_not_found(client, headers):
    service = await create_service(client, headers)
    response = await book(client, headers, 999, service["id"])
    assert response.status_code == 404


async def test_invalid_time_is_rejected(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    response = await book(client, headers, customer["id"], service["id"], time="25:00")
    assert response.status_code == 422


async def test_free_quota_blocks_eleventh_booking(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    for day in range(1, 11):
        response = await book(client, headers, customer["id"], service["id"], day=f"2024-05-{day:02d}")
        assert response.status_code == 200, response.text

    response = await book(client, headers, customer["id"], service["id"], day="2024-05-28")

    assert response.status_code == 402
    assert "limit" in response.json()["detail"].lower()
    listed = (await client.get("/appointments/", headers=headers)).json()
    assert len(listed) == 10

    me = (await client.get("/auth/me", headers=headers)).json()
    assert me["appointments_this_month"] == 10
    assert me["reference_month"] == "2024-05"


async def test_canceled_appointments_still_count_towards_quota(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    for day in range(1, 11):
        appointment = (await book(client, headers, customer["id"], service["id"], day=f"2024-05-{day:02d}")).json()
        await client.post(f"/appointments/{appointment['id']}/cancel", headers=headers)

    response = await book(client, headers, customer["id"], service["id"])
    assert response.status_code == 402


async def test_deleting_frees_quota(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    booked = []
    for day in range(1, 11):
        booked.append((await book(client, headers, customer["id"], service["id"], day=f"2024-05-{day:02d}")).json())

    assert (await client.delete(f"/appointments/{booked[0]['id']}", headers=headers)).status_code == 200

    response = await book(client, headers, customer["id"], service["id"])
    assert response.status_code == 200


async def test_paid_plans_have_no_quota(client, make_account, login):
    await make_account(email="bia@studio.com", plan="basic")
    headers = await login("bia@studio.com")
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    for day in range(1, 13):
        response = await book(client, headers, customer["id"], service["id"], day=f"2024-05-{day:02d}")
        assert response.status_code == 200


async def test_advance_and_cancel_lifecycle(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    appointment = (await book(client, headers, customer["id"], service["id"])).json()
    path = f"/appointments/{appointment['id']}"

    assert (await client.post(f"{path}/advance", headers=headers)).json()["status"] == "confirmed"
    assert (await client.post(f"{path}/advance", headers=headers)).json()["status"] == "completed"

    assert (await client.post(f"{path}/advance", headers=headers)).status_code == 409
    assert (await client.post(f"{path}/cancel", headers=headers)).status_code == 409


async def test_cancel_confirmed_appointment(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    appointment = (await book(client, headers, customer["id"], service["id"])).json()
    path = f"/appointments/{appointment['id']}"

    await client.post(f"{path}/advance", headers=headers)
    response = await client.post(f"{path}/cancel", headers=headers)

    assert response.json()["status"] == "canceled"
    assert (await client.post(f"{path}/advance", headers=headers)).status_code == 409


async def test_agenda_week_and_selected_day(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    await book(client, headers, customer["id"], service["id"], day="2024-05-15", time="14:00")
    await book(client, headers, customer["id"], service["id"], day="2024-05-15", time="08:30")
    await book(client, headers, customer["id"], service["id"], day="2024-05-17", time="10:00")

    response = await client.get("/appointments/agenda", headers=headers)

    assert response.status_code == 200, response.text
    agenda = response.json()
    assert [day["date"] for day in agenda["week"]][0] == "2024-05-12"
    counts = {day["date"]: day["appointment_count"] for day in agenda["week"]}
    assert counts["2024-05-15"] == 2
    assert counts["2024-05-17"] == 1
    today = next(day for day in agenda["week"] if day["is_today"])
    assert today["date"] == "2024-05-15" and today["is_selected"]
    assert [a["time"] for a in agenda["appointments"]] == ["08:30", "14:00"]
    assert agenda["month_usage"] == 3
    assert agenda["monthly_quota"] == 10
    assert agenda["quota_reached"] is False
    assert len(agenda["time_slots"]) == 30


async def test_appointments_are_private_to_their_owner(client, headers, make_account, login):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    appointment = (await book(client, headers, customer["id"], service["id"])).json()

    await make_account(email="outra@studio.com")
    other = await login("outra@studio.com")

    assert (await client.get(f"/appointments/{appointment['id']}", headers=other)).status_code == 404
    assert (await client.get("/appointments/", headers=other)).json() == []
    assert (await book(client, other, customer["id"], service["id"])).status_code == 404


async def test_requires_authentication(client):
    assert (await client.get("/appointments/")).status_code == 401


async def test_moving_appointments_out_of_the_month_frees_quota(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    booked = [
        (await book(client, headers, customer["id"], service["id"], day="2024-05-20")).json()
        for _ in range(10)
    ]

    for appointment in booked:
        response = await client.put(
            f"/appointments/{appointment['id']}",
            json={"client_id": customer["id"], "service_id": service["id"], "date": "2024-06-20", "time": "10:00"},
            headers=headers,
        )
        assert response.status_code == 200

    dashboard = (await client.get("/reports/dashboard", headers=headers)).json()
    assert dashboard["month_appointment_count"] == 0
    assert dashboard["quota"]["used"] == 0
    assert dashboard["quota"]["reached"] is False

    assert (await book(client, headers, customer["id"], service["id"])).status_code == 200


async def test_moving_an_appointment_into_the_month_counts_it(client, headers):
    customer = await create_client(client, headers)
    service = await create_service(client, headers)
    appointment = (await book(client, headers, customer["id"], service["id"], day="2024-06-03")).json()

    await client.put(
        f"/appointments/{appointment['id']}",
        json={"client_id": customer["id"], "service_id": service["id"], "date": "2024-05-03", "time": "10:00"},
        headers=headers,
    )

    dashboard = (await client.get("/reports/dashboard", headers=headers)).json()
    assert dashboard["quota"]["used"] == dashboard["month_appointment_count"] == 1

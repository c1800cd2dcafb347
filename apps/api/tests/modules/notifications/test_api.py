"""
API tests for POST /notifications.
"""

import pytest

URL = "/api/v1/notifications"


@pytest.mark.asyncio
async def test_broadcast_to_all(client, stores, transport, make_guardian):
    await stores.guardians.add(make_guardian("p1@test.com"))
    await stores.guardians.add(make_guardian("p2@test.com"))

    res = await client.post(URL, json={"to": ["All"], "subject": "Reunión", "body": "Viernes"})

    assert res.status_code == 200
    assert res.json() == {"status": "OK", "recipients": ["p1@test.com", "p2@test.com"]}
    transport.assert_awaited_once_with(["p1@test.com", "p2@test.com"], "Reunión", "Viernes")


@pytest.mark.asyncio
async def test_delivery_failure(client, transport):
    transport.return_value = False

    res = await client.post(URL, json={"to": ["x@test.com"], "subject": "Hola", "body": "Hola"})

    assert res.status_code == 502
    assert res.json() == {
        "failed": True,
        "error": "DELIVERY_FAILED",
        "message": "Error al enviar la notificación",
    }


@pytest.mark.asyncio
async def test_empty_subject_rejected(client, transport):
    res = await client.post(URL, json={"to": ["x@test.com"], "subject": "", "body": "Hola"})

    assert res.status_code == 422
    assert "subject" in res.json()["field_errors"]
    transport.assert_not_awaited()


@pytest.mark.asyncio
async def test_requires_admin(anonymous_client, transport):
    res = await anonymous_client.post(URL, json={"to": ["All"], "subject": "a", "body": "b"})

    assert res.status_code in (401, 403)
    transport.assert_not_awaited()


@pytest.mark.asyncio
async def test_rate_limited(client):
    payload = {"to": ["x@test.com"], "subject": "Hola", "body": "Hola"}

    statuses = [(await client.post(URL, json=payload)).status_code for _ in range(6)]

    assert statuses == [200] * 5 + [429]

"""
Calendar endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

import pytest

from app.core.config import settings

PREFIX = settings.API_V1_PREFIX + "/calendars"


def _calendar_body(**overrides):
    body = {
        "name": "Support",
        "description": "Support desk",
        "work_days": [1, 2, 3, 4, 5],
        "business_hours": [
            {"day": 7, "start_time": "08:00", "end_time": "12:00"},
            {"day": 7, "start_time": "13:00", "end_time": "18:00"},
        ],
        "holidays": [
            {"name": "Christmas", "start_date": "2026-12-25", "recurring": True},
        ],
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_save_and_get_calendar(test_client):
    response = await test_client.post(PREFIX, json=_calendar_body())

    assert response.status_code == 201
    saved = response.json()
    assert len(saved["uid"]) == 32
    assert len(saved["business_hours"]) == 2
    assert saved["holidays"][0]["recurring"] is True
    assert saved["holidays"][0]["end_date"] == "2026-12-25"

    response = await test_client.get(f"{PREFIX}/{saved['uid']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Support"


@pytest.mark.asyncio
async def test_save_duplicate_uid_conflicts(test_client):
    await test_client.post(PREFIX, json=_calendar_body(uid="SUPPORT"))

    response = await test_client.post(PREFIX, json=_calendar_body(uid="SUPPORT"))

    assert response.status_code == 409
    assert response.json()["error"]["details"] == {"uid": "SUPPORT"}


@pytest.mark.asyncio
async def test_save_rejects_malformed_payload(test_client):
    body = _calendar_body(business_hours=[{"day": 8, "start_time": "09:00", "end_time": "17:00"}])

    response = await test_client.post(PREFIX, json=body)

    assert response.status_code == 422
    assert response.json()["error"]["message"] == "Validation error"


@pytest.mark.asyncio
async def test_get_default_calendar(test_client):
    response = await test_client.get(f"{PREFIX}/default")

    assert response.status_code == 200
    assert response.json()["uid"] == settings.DEFAULT_CALENDAR_UID


@pytest.mark.asyncio
async def test_unknown_calendar_falls_back_unless_strict(test_client):
    response = await test_client.get(f"{PREFIX}/nope")
    assert response.status_code == 200
    assert response.json()["uid"] == settings.DEFAULT_CALENDAR_UID

    response = await test_client.get(f"{PREFIX}/nope", params={"strict": True})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_validate_endpoint_reports_reason(test_client):
    response = await test_client.post(f"{PREFIX}/validate", json=_calendar_body(work_days=[1, 2]))

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is False
    assert data["reason"] == "TOO_FEW_WORK_DAYS"
    assert data["definition"] is None


@pytest.mark.asyncio
async def test_assign_and_resolve(test_client):
    saved = (await test_client.post(PREFIX, json=_calendar_body())).json()

    response = await test_client.post(
        f"{PREFIX}/assignments",
        json={"owner_uid": "P1", "owner_type": "PROCESS", "calendar_uid": saved["uid"]},
    )
    assert response.status_code == 201

    response = await test_client.get(
        f"{PREFIX}/resolve",
        params={"user_uid": "U9", "process_uid": "P1", "task_uid": "T1"},
    )
    assert response.status_code == 200
    resolved = response.json()
    assert resolved["owner"] == "PROCESS"
    assert resolved["uid"] == saved["uid"]

    response = await test_client.get(f"{PREFIX}/assignments/P1")
    assert response.json()["total"] == 1


@pytest.mark.asyncio
async def test_resolve_without_assignments(test_client):
    response = await test_client.get(f"{PREFIX}/resolve", params={"user_uid": "U1"})

    assert response.status_code == 200
    assert response.json()["owner"] == "DEFAULT"

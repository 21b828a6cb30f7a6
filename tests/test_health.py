"""
Health endpoint tests using pytest-asyncio and httpx.AsyncClient.
"""

import pytest

from app.core.config import settings
from app.services.calendar_service import CalendarService


@pytest.mark.asyncio
async def test_health_endpoint(test_client):
    """Test the health check endpoint returns expected structure."""
    response = await test_client.get(f"{settings.API_V1_PREFIX}/health")

    assert response.status_code == 200
    data = response.json()

    assert data["status"] == "ok"
    assert data["uptime"].startswith("PT")
    assert data["checks"]["database"] == "ok"
    assert data["checks"]["default_calendar"] == "missing"


@pytest.mark.asyncio
async def test_health_reports_seeded_default(test_client, test_db_session):
    await CalendarService(test_db_session).initialize_default()

    response = await test_client.get(f"{settings.API_V1_PREFIX}/health")

    assert response.json()["checks"]["default_calendar"] == "ok"

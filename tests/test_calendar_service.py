"""
Calendar service tests: default bootstrap, reads with fallback, and the save workflow.
"""

import re
from datetime import date, time

import pytest
from sqlalchemy import func, select

from app.core.config import settings
from app.core.exceptions import CalendarAlreadyExistsError
from app.models.calendar import (
    CalendarAssignment,
    CalendarBusinessHours,
    CalendarDefinition,
    CalendarHoliday,
    CalendarStatus,
    OwnerKind,
)
from app.schemas.calendar import CalendarAssignmentCreate
from app.services.calendar_service import CalendarService


async def _count(session, model) -> int:
    result = await session.execute(select(func.count(model.id)))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_get_default_creates_once(test_db_session):
    service = CalendarService(test_db_session)

    first = await service.get_default()
    second = await service.get_default()

    assert first.uid == settings.DEFAULT_CALENDAR_UID
    assert second.uid == first.uid
    assert second.id == first.id
    assert await _count(test_db_session, CalendarDefinition) == 1


@pytest.mark.asyncio
async def test_default_calendar_canonical_content(test_db_session):
    service = CalendarService(test_db_session)

    await service.initialize_default()
    information = await service.get_full_information(settings.DEFAULT_CALENDAR_UID)

    assert information.name == "Default Calendar"
    assert information.status == CalendarStatus.ACTIVE
    assert information.work_days == [1, 2, 3, 4, 5]
    assert len(information.business_hours) == 1
    rule = information.business_hours[0]
    assert rule.day == 7
    assert rule.start_time == time(9, 0)
    assert rule.end_time == time(17, 0)
    assert information.holidays == []


@pytest.mark.asyncio
async def test_default_is_shared_across_sessions(test_session_maker):
    async with test_session_maker() as session:
        first = await CalendarService(session).initialize_default()
    async with test_session_maker() as session:
        second = await CalendarService(session).initialize_default()
        assert await _count(session, CalendarDefinition) == 1

    assert first.id == second.id


@pytest.mark.asyncio
async def test_save_information_generates_uid_and_children(test_db_session, make_calendar):
    service = CalendarService(test_db_session)
    payload = make_calendar(
        rule_days=[1, 2, 3, 4, 5],
        holidays=[("New Year", date(2026, 1, 1)), ("Labour Day", date(2026, 5, 1))],
    )

    saved = await service.save_information(payload)

    assert re.fullmatch(r"[0-9a-f]{32}", saved.uid)
    assert await _count(test_db_session, CalendarDefinition) == 1
    assert await _count(test_db_session, CalendarBusinessHours) == 5
    assert await _count(test_db_session, CalendarHoliday) == 2

    information = await service.get_full_information(saved.uid)
    assert len(information.business_hours) == 5
    assert len(information.holidays) == 2
    assert [h.name for h in information.holidays] == ["New Year", "Labour Day"]
    assert all(h.calendar_uid == saved.uid for h in information.business_hours)
    assert information.holidays[0].end_date == date(2026, 1, 1)


@pytest.mark.asyncio
async def test_holidays_returned_in_insertion_order(test_db_session, make_calendar):
    service = CalendarService(test_db_session)
    saved = await service.save_information(
        make_calendar(
            uid="OPS",
            holidays=[("Labour Day", date(2026, 5, 1)), ("New Year", date(2026, 1, 1))],
        )
    )

    information = await service.get_full_information(saved.uid)

    assert [h.name for h in information.holidays] == ["Labour Day", "New Year"]
    rows = await service.holiday_repo.list_by_calendar(saved.uid)
    assert [row.name for row in rows] == ["Labour Day", "New Year"]


@pytest.mark.asyncio
async def test_save_information_keeps_supplied_uid(test_db_session, make_calendar):
    service = CalendarService(test_db_session)

    saved = await service.save_information(make_calendar(uid="OPS"))

    assert saved.uid == "OPS"


@pytest.mark.asyncio
async def test_save_information_rejects_existing_uid(test_db_session, make_calendar):
    service = CalendarService(test_db_session)
    await service.save_information(make_calendar(uid="OPS"))

    with pytest.raises(CalendarAlreadyExistsError):
        await service.save_information(make_calendar(uid="OPS", name="Other"))

    assert await _count(test_db_session, CalendarDefinition) == 1


@pytest.mark.asyncio
async def test_save_information_rolls_back_on_child_failure(test_db_session, make_calendar, monkeypatch):
    service = CalendarService(test_db_session)

    async def failing_create(**kwargs):
        raise RuntimeError("store unavailable")

    monkeypatch.setattr(service.holiday_repo, "create", failing_create)

    with pytest.raises(RuntimeError):
        await service.save_information(
            make_calendar(uid="OPS", holidays=[("New Year", date(2026, 1, 1))])
        )

    assert await service.get_definition("OPS") is None
    assert await _count(test_db_session, CalendarBusinessHours) == 0


@pytest.mark.asyncio
async def test_get_definition_absent_and_fallback(test_db_session):
    service = CalendarService(test_db_session)

    assert await service.get_definition("missing") is None

    fallback = await service.get_definition("missing", fallback_to_default=True)
    assert fallback.uid == settings.DEFAULT_CALENDAR_UID


@pytest.mark.asyncio
async def test_get_full_information_falls_back_when_missing(test_db_session):
    service = CalendarService(test_db_session)

    information = await service.get_full_information("missing")

    assert information.uid == settings.DEFAULT_CALENDAR_UID


@pytest.mark.asyncio
async def test_get_full_information_validation_substitutes_default(test_db_session, make_calendar):
    service = CalendarService(test_db_session)
    saved = await service.save_information(make_calendar(work_days=[1, 2], uid="TWODAYS"))

    unvalidated = await service.get_full_information(saved.uid)
    validated = await service.get_full_information(saved.uid, validate=True)

    assert unvalidated.uid == "TWODAYS"
    assert validated.uid == settings.DEFAULT_CALENDAR_UID
    assert len(validated.business_hours) == 1


@pytest.mark.asyncio
async def test_get_full_information_keeps_valid_calendar(test_db_session, make_calendar):
    service = CalendarService(test_db_session)
    saved = await service.save_information(make_calendar(uid="OPS"))

    information = await service.get_full_information(saved.uid, validate=True)

    assert information.uid == "OPS"


@pytest.mark.asyncio
async def test_validate_information_on_unsaved_payload(test_db_session, make_calendar):
    service = CalendarService(test_db_session)
    payload = make_calendar(rule_days=[1])

    substituted = await service.validate_information(payload)

    assert substituted.uid == settings.DEFAULT_CALENDAR_UID


@pytest.mark.asyncio
async def test_save_assignment_does_not_deduplicate(test_db_session):
    service = CalendarService(test_db_session)
    payload = CalendarAssignmentCreate(owner_uid="P1", owner_type=OwnerKind.PROCESS, calendar_uid="OPS")

    first = await service.save_assignment(payload)
    second = await service.save_assignment(payload)

    assert first.id != second.id
    assert await _count(test_db_session, CalendarAssignment) == 2
    items, total = await service.list_assignments("P1")
    assert total == 2
    assert [a.id for a in items] == [first.id, second.id]


def test_assignment_rejects_default_owner_type():
    with pytest.raises(ValueError):
        CalendarAssignmentCreate(owner_uid="P1", owner_type=OwnerKind.DEFAULT, calendar_uid="OPS")

"""Unit tests for event use cases."""

from datetime import time
from uuid import uuid4

import pytest

from booking.application.usecase.event import (
    CreateEventRequest,
    CreateEventUseCase,
    DeleteEventRequest,
    DeleteEventUseCase,
    EventChanges,
    GetEventRequest,
    GetEventUseCase,
    ListEventsRequest,
    ListEventsUseCase,
    SetEventLockRequest,
    SetEventLockUseCase,
    UpdateEventRequest,
    UpdateEventUseCase,
)
from booking.domain.error import NotFoundError, ValidationError
from booking.domain.repository import EventRepository
from booking.domain.value import EventStatus, MentorId, Role, StatusFilter, ViewMode
from tests.conftest import make_actor, make_event, next_week
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateEventUseCase:
    @pytest.mark.asyncio
    async def test_create_returns_actor_view(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreateEventUseCase)
        staff = make_actor(Role.STAFF)
        co_host = str(uuid4())

        # Act
        response = await use_case.execute(
            CreateEventRequest(
                actor=staff,
                company="Acme Labs",
                date=next_week(),
                time=time(13, 0),
                duration_minutes=90,
                staff_members=[str(staff.id), co_host],
            )
        )

        # Assert
        assert response.status is EventStatus.NEW
        assert response.end_time == time(14, 30)
        assert response.primary_staff_id == str(staff.id)
        assert response.staff_members == [str(staff.id), co_host]
        assert response.involvement.staff
        assert not response.can_request


class TestGetEventUseCase:
    @pytest.mark.asyncio
    async def test_hidden_event_is_not_found_for_mentor(self, unit_env):
        use_case = await unit_env.get(GetEventUseCase)
        repo = await unit_env.get(EventRepository)
        event = await repo.insert(make_event())

        with pytest.raises(NotFoundError):
            await use_case.execute(
                GetEventRequest(actor=make_actor(Role.MENTOR), event_id=str(event.id))
            )

    @pytest.mark.asyncio
    async def test_visible_event_reports_request_eligibility(self, unit_env):
        use_case = await unit_env.get(GetEventUseCase)
        repo = await unit_env.get(EventRepository)
        mentor = make_actor(Role.MENTOR)
        event = await repo.insert(
            make_event(initial_selected_mentors=[mentor.mentor_id])
        )

        response = await use_case.execute(
            GetEventRequest(actor=mentor, event_id=str(event.id))
        )

        assert response.event_id == str(event.id)
        assert response.can_request
        assert not response.is_past


class TestListEventsUseCase:
    @pytest.mark.asyncio
    async def test_list_with_status_filter(self, unit_env):
        use_case = await unit_env.get(ListEventsUseCase)
        repo = await unit_env.get(EventRepository)
        open_event = await repo.insert(make_event())
        await repo.insert(
            make_event(required_mentor_count=1, accepted_mentors=(MentorId(uuid4()),))
        )

        response = await use_case.execute(
            ListEventsRequest(
                actor=make_actor(Role.STAFF),
                view=ViewMode.ALL,
                status=StatusFilter.NEEDS_MENTORS,
            )
        )

        assert response.total == 1
        assert response.events[0].event_id == str(open_event.id)


class TestUpdateAndLockUseCases:
    @pytest.mark.asyncio
    async def test_only_set_fields_are_applied(self, unit_env):
        use_case = await unit_env.get(UpdateEventUseCase)
        repo = await unit_env.get(EventRepository)
        event = await repo.insert(make_event(description="Kick-off"))

        response = await use_case.execute(
            UpdateEventRequest(
                actor=make_actor(Role.STAFF),
                event_id=str(event.id),
                changes=EventChanges(company="Acme Research"),
            )
        )

        assert response.company == "Acme Research"
        assert response.description == "Kick-off"

    @pytest.mark.asyncio
    async def test_clearing_staff_members_is_rejected(self, unit_env):
        use_case = await unit_env.get(UpdateEventUseCase)
        repo = await unit_env.get(EventRepository)
        event = await repo.insert(make_event())

        with pytest.raises(ValidationError, match="staff_members"):
            await use_case.execute(
                UpdateEventRequest(
                    actor=make_actor(Role.STAFF),
                    event_id=str(event.id),
                    changes=EventChanges.model_validate({"staff_members": None}),
                )
            )

        assert (await repo.find_by_id(event.id)).version == event.version

    @pytest.mark.asyncio
    async def test_description_can_be_cleared(self, unit_env):
        use_case = await unit_env.get(UpdateEventUseCase)
        repo = await unit_env.get(EventRepository)
        event = await repo.insert(make_event(description="Kick-off"))

        response = await use_case.execute(
            UpdateEventRequest(
                actor=make_actor(Role.STAFF),
                event_id=str(event.id),
                changes=EventChanges.model_validate({"description": None}),
            )
        )

        assert response.description is None

    @pytest.mark.asyncio
    async def test_lock_use_case(self, unit_env):
        use_case = await unit_env.get(SetEventLockUseCase)
        repo = await unit_env.get(EventRepository)
        event = await repo.insert(make_event())

        response = await use_case.execute(
            SetEventLockRequest(
                actor=make_actor(Role.STAFF), event_id=str(event.id), locked=True
            )
        )

        assert response.locked
        assert response.status is EventStatus.LOCKED

    @pytest.mark.asyncio
    async def test_delete_use_case(self, unit_env):
        use_case = await unit_env.get(DeleteEventUseCase)
        repo = await unit_env.get(EventRepository)
        event = await repo.insert(make_event())

        response = await use_case.execute(
            DeleteEventRequest(actor=make_actor(Role.STAFF), event_id=str(event.id))
        )

        assert response.deleted
        assert await repo.find_by_id(event.id) is None

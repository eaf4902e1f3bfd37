"""Unit tests for BookingSession over the mocked container."""

from datetime import time

import pytest

from booking.adapter.realtime import InMemoryChangeFeed
from booking.application.sync import BookingSession
from booking.domain.error import (
    NotEligibleError,
    PermissionDeniedError,
    RemoteWriteError,
)
from booking.domain.repository import EventRepository
from booking.domain.value import EventStatus, Role, ViewMode
from tests.conftest import make_actor, make_event, next_week, token_for
from tests.harness import create_app_container_fixture

app_container = create_app_container_fixture()


async def _seed(container, *events):
    repo = await container.get(EventRepository)
    for event in events:
        await repo.insert(event)


class TestBookingSession:
    @pytest.mark.asyncio
    async def test_open_loads_events_and_listens(self, app_container):
        mentor = make_actor(Role.MENTOR)
        visible = make_event(initial_selected_mentors=[mentor.mentor_id])
        hidden = make_event()
        await _seed(app_container, visible, hidden)

        session = await BookingSession.open(app_container, token_for(mentor))

        assert session.actor.id == mentor.id
        assert session.store.reload_count == 1
        assert session.invalidator.is_running
        assert session.events() == [visible]
        assert session.get_event(hidden.id) is None
        await session.close()

    @pytest.mark.asyncio
    async def test_request_updates_cache_before_returning(self, app_container):
        mentor = make_actor(Role.MENTOR)
        event = make_event(initial_selected_mentors=[mentor.mentor_id])
        await _seed(app_container, event)

        async with await BookingSession.open(
            app_container, token_for(mentor)
        ) as session:
            updated = await session.request(event.id)

            cached = session.get_event(event.id)
            assert cached.version == updated.version
            assert cached.status is EventStatus.FIRST_REQUESTS
            assert session.events(view=ViewMode.MY) == [cached]

    @pytest.mark.asyncio
    async def test_acceptance_reaches_mentor_session(self, app_container):
        """Another user's accept invalidates the mentor's cache."""
        mentor = make_actor(Role.MENTOR)
        manager = make_actor(Role.MENTORING_MANAGEMENT)
        event = make_event(initial_selected_mentors=[mentor.mentor_id])
        await _seed(app_container, event)

        mentor_session = await BookingSession.open(app_container, token_for(mentor))
        manager_session = await BookingSession.open(app_container, token_for(manager))
        try:
            await mentor_session.request(event.id)
            assert mentor_session.take_newly_accepted() == []

            await manager_session.accept(event.id, mentor.mentor_id)

            cached = mentor_session.get_event(event.id)
            assert cached.accepted_mentors == (mentor.mentor_id,)
            assert [e.id for e in mentor_session.take_newly_accepted()] == [event.id]
            # Reported once
            assert mentor_session.take_newly_accepted() == []
        finally:
            await manager_session.close()
            await mentor_session.close()

    @pytest.mark.asyncio
    async def test_rejected_operation_leaves_cache_alone(self, app_container):
        mentor = make_actor(Role.MENTOR)
        event = make_event(initial_selected_mentors=[mentor.mentor_id])
        await _seed(app_container, event)
        feed = await app_container.get(InMemoryChangeFeed)

        async with await BookingSession.open(
            app_container, token_for(mentor)
        ) as session:
            await session.request(event.id)
            published = len(feed.published)

            with pytest.raises(NotEligibleError):
                await session.request(event.id)

            assert len(feed.published) == published
            assert session.get_event(event.id).requesting_mentors == (
                mentor.mentor_id,
            )

    @pytest.mark.asyncio
    async def test_failed_write_leaves_cache_at_last_known_state(
        self, app_container, monkeypatch
    ):
        mentor = make_actor(Role.MENTOR)
        manager = make_actor(Role.MENTORING_MANAGEMENT)
        event = make_event(initial_selected_mentors=[mentor.mentor_id])
        await _seed(app_container, event)
        feed = await app_container.get(InMemoryChangeFeed)
        repo = await app_container.get(EventRepository)

        async with await BookingSession.open(
            app_container, token_for(mentor)
        ) as mentor_session:
            requested = await mentor_session.request(event.id)
            manager_session = await BookingSession.open(
                app_container, token_for(manager)
            )
            published = len(feed.published)

            async def failing_update(*args, **kwargs):
                raise RemoteWriteError("event update", "connection reset")

            monkeypatch.setattr(repo, "update", failing_update)

            with pytest.raises(RemoteWriteError):
                await manager_session.accept(event.id, mentor.mentor_id)
            assert manager_session.get_event(event.id).accepted_mentors == ()
            await manager_session.close()

            assert len(feed.published) == published
            cached = mentor_session.get_event(event.id)
            assert cached.version == requested.version
            assert cached.requesting_mentors == (mentor.mentor_id,)
            assert cached.accepted_mentors == ()
            assert mentor_session.take_newly_accepted() == []

    @pytest.mark.asyncio
    async def test_switch_role_changes_capabilities(self, app_container):
        actor = make_actor(Role.STAFF, Role.MENTOR)

        async with await BookingSession.open(
            app_container, token_for(actor)
        ) as session:
            assert session.capabilities.can_create_events
            assert session.available_roles() == [Role.STAFF, Role.MENTOR]

            session.switch_role(Role.MENTOR)

            assert not session.capabilities.can_create_events
            with pytest.raises(PermissionDeniedError):
                session.switch_role(Role.SUPER_ADMIN)

    @pytest.mark.asyncio
    async def test_staff_event_lifecycle(self, app_container):
        staff = make_actor(Role.STAFF)

        async with await BookingSession.open(
            app_container, token_for(staff)
        ) as session:
            created = await session.create_event(
                company="Acme Labs", date=next_week(), time=time(10, 0)
            )
            assert session.events(view=ViewMode.STAFF) == [created]

            locked = await session.set_lock(created.id, True)
            assert session.get_event(created.id).status is EventStatus.LOCKED
            assert locked.version == 2

            await session.update_event(created.id, {"company": "Acme Research"})
            assert session.get_event(created.id).company == "Acme Research"

            await session.delete_event(created.id)
            assert session.get_event(created.id) is None

    @pytest.mark.asyncio
    async def test_close_clears_cache(self, app_container):
        mentor = make_actor(Role.MENTOR)
        session = await BookingSession.open(app_container, token_for(mentor))

        await session.close()

        assert not session.store.is_loaded
        assert not session.invalidator.is_running

"""Unit tests for PermissionService."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from booking.domain.error import PermissionDeniedError
from booking.domain.service import CAPABILITY_TABLE, PermissionService
from booking.domain.value import IneligibilityReason, MentorId, Role
from tests.conftest import make_actor, make_event


@pytest.fixture
def permission_service():
    return PermissionService()


class TestCapabilities:
    """Capability table per active role."""

    def test_mentor_and_guest_have_no_capabilities(self):
        assert CAPABILITY_TABLE[Role.MENTOR].granted() == []
        assert CAPABILITY_TABLE[Role.GUEST].granted() == []

    @pytest.mark.parametrize(
        "role", [Role.STAFF, Role.MENTORING_MANAGEMENT, Role.SUPER_ADMIN]
    )
    def test_staff_level_roles_manage_events(self, role):
        capabilities = CAPABILITY_TABLE[role]
        assert capabilities.can_create_events
        assert capabilities.can_edit_events
        assert capabilities.can_delete_events
        assert capabilities.can_process_mentor_requests

    def test_administrative_capabilities(self):
        assert not CAPABILITY_TABLE[Role.STAFF].can_manage_mentors
        assert CAPABILITY_TABLE[Role.MENTORING_MANAGEMENT].can_manage_mentors
        assert CAPABILITY_TABLE[Role.SUPER_ADMIN].can_manage_mentors

    def test_admin_data_is_super_admin_only(self):
        for role in Role:
            assert CAPABILITY_TABLE[role].can_view_admin_data is (
                role is Role.SUPER_ADMIN
            )
            assert CAPABILITY_TABLE[role].can_manage_accounts is (
                role is Role.SUPER_ADMIN
            )

    def test_assigning_mentors_is_mentoring_management_only(self):
        for role in Role:
            assert CAPABILITY_TABLE[role].can_assign_mentors is (
                role is Role.MENTORING_MANAGEMENT
            )

    def test_nobody_edits_own_profile(self):
        assert not any(c.can_edit_own_profile for c in CAPABILITY_TABLE.values())

    def test_capabilities_follow_active_role(self, permission_service):
        actor = make_actor(Role.STAFF, Role.MENTOR).with_active_role(Role.MENTOR)
        assert not permission_service.capabilities_for(actor).can_create_events

    def test_require_raises_for_missing_capability(self, permission_service):
        actor = make_actor(Role.MENTOR)
        with pytest.raises(PermissionDeniedError) as exc_info:
            permission_service.require(actor, "can_create_events", "create events")
        assert exc_info.value.capability == "can_create_events"


class TestRequestEligibility:
    def test_mentor_may_request_open_event(self, permission_service):
        mentor = make_actor(Role.MENTOR)
        event = make_event()

        assert permission_service.check_request_eligibility(event, mentor) is None
        assert permission_service.can_request_mentor(event, mentor)

    def test_only_active_mentors_may_request(self, permission_service):
        staff = make_actor(Role.STAFF, Role.MENTOR)
        assert (
            permission_service.check_request_eligibility(make_event(), staff)
            is IneligibilityReason.NOT_A_MENTOR
        )

    @pytest.mark.parametrize(
        ("field", "reason"),
        [
            ("requesting_mentors", IneligibilityReason.ALREADY_REQUESTED),
            ("accepted_mentors", IneligibilityReason.ALREADY_ACCEPTED),
            ("declined_mentors", IneligibilityReason.ALREADY_DECLINED),
        ],
    )
    def test_existing_membership_blocks_request(
        self, permission_service, field, reason
    ):
        mentor = make_actor(Role.MENTOR)
        event = make_event(required_mentor_count=5, **{field: (mentor.mentor_id,)})

        assert permission_service.check_request_eligibility(event, mentor) is reason

    def test_full_event_cannot_be_requested(self, permission_service):
        mentor = make_actor(Role.MENTOR)
        event = make_event(required_mentor_count=1, accepted_mentors=(MentorId(uuid4()),))

        assert (
            permission_service.check_request_eligibility(event, mentor)
            is IneligibilityReason.EVENT_FULL
        )

    def test_past_event_cannot_be_requested(self, permission_service):
        mentor = make_actor(Role.MENTOR)
        event = make_event()
        later = event.starts_at + timedelta(hours=1)

        assert (
            permission_service.check_request_eligibility(event, mentor, later)
            is IneligibilityReason.EVENT_IN_PAST
        )

    def test_locked_event_can_still_be_requested(self, permission_service):
        mentor = make_actor(Role.MENTOR)
        assert permission_service.can_request_mentor(make_event(locked=True), mentor)


class TestVisibilityAndEditing:
    def test_mentor_sees_only_preselected_events(self, permission_service):
        mentor = make_actor(Role.MENTOR)
        selected = make_event(initial_selected_mentors=[mentor.mentor_id])
        other = make_event(initial_selected_mentors=[MentorId(uuid4())])

        assert permission_service.can_mentor_view_event(selected, mentor)
        assert not permission_service.can_mentor_view_event(other, mentor)

    def test_staff_sees_everything(self, permission_service):
        staff = make_actor(Role.STAFF)
        assert permission_service.can_mentor_view_event(make_event(), staff)

    def test_past_events_are_editable_by_super_admin_only(self, permission_service):
        event = make_event()
        later = event.starts_at + timedelta(days=1)
        staff = make_actor(Role.STAFF)
        admin = make_actor(Role.SUPER_ADMIN)

        assert permission_service.can_edit_event(event, staff)
        assert not permission_service.can_edit_event(event, staff, later)
        assert permission_service.can_edit_event(event, admin, later)
        assert not permission_service.can_delete_event(event, staff, later)
        assert permission_service.can_delete_event(event, admin, later)

    def test_mentor_cannot_edit(self, permission_service):
        assert not permission_service.can_edit_event(
            make_event(), make_actor(Role.MENTOR), datetime.now()
        )


class TestRoleSwitching:
    def test_held_roles_can_be_activated(self, permission_service):
        actor = make_actor(Role.STAFF, Role.MENTOR)

        switched = permission_service.switch_role(actor, Role.MENTOR)

        assert switched.active_role is Role.MENTOR
        assert switched.original_role is Role.STAFF

    def test_unheld_role_is_refused(self, permission_service):
        actor = make_actor(Role.MENTOR)
        with pytest.raises(PermissionDeniedError):
            permission_service.switch_role(actor, Role.STAFF)

    def test_super_admin_may_activate_any_assignable_role(self, permission_service):
        admin = make_actor(Role.SUPER_ADMIN)

        assert permission_service.available_roles(admin) == list(Role.assignable())
        as_mentor = permission_service.switch_role(admin, Role.MENTOR)
        # Still allowed to come back after switching away
        back = permission_service.switch_role(as_mentor, Role.MENTORING_MANAGEMENT)
        assert back.active_role is Role.MENTORING_MANAGEMENT

    def test_guest_cannot_be_activated(self, permission_service):
        admin = make_actor(Role.SUPER_ADMIN)
        assert not permission_service.can_activate(admin, Role.GUEST)

    def test_available_roles_in_priority_order(self, permission_service):
        actor = make_actor(Role.MENTOR, Role.MENTORING_MANAGEMENT, Role.STAFF)
        assert permission_service.available_roles(actor) == [
            Role.STAFF,
            Role.MENTORING_MANAGEMENT,
            Role.MENTOR,
        ]

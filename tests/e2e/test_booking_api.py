"""End-to-end tests for the booking HTTP API."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from booking.domain.repository import ProductRepository
from booking.domain.value import Role
from booking.interface.api.app import create_app
from tests.conftest import make_actor, make_product, next_week, token_for
from tests.di import build_test_container

STAFF = make_actor(Role.STAFF)
MENTOR = make_actor(Role.MENTOR)
OTHER_MENTOR = make_actor(Role.MENTOR)
STAFF_MENTOR = make_actor(Role.STAFF, Role.MENTOR)
MANAGER = make_actor(Role.MENTORING_MANAGEMENT)
GUEST = make_actor()


def auth(actor, active_role=None) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {token_for(actor)}"}
    if active_role:
        headers["X-Active-Role"] = active_role
    return headers


@pytest.fixture
def client():
    """Create test client over a container seeded with one product."""
    test_container = build_test_container()

    async def seed() -> None:
        products = await test_container.get(ProductRepository)
        await products.save(
            make_product(
                approved_mentors=(
                    MENTOR.mentor_id,
                    OTHER_MENTOR.mentor_id,
                    STAFF_MENTOR.mentor_id,
                )
            )
        )

    asyncio.run(seed())
    return TestClient(create_app(test_container))


def create_event(client: TestClient, **overrides) -> dict:
    body = {
        "company": "Acme Labs",
        "date": next_week().isoformat(),
        "time": "10:00:00",
        "required_mentor_count": 2,
        "product_id": 1,
        **overrides,
    }
    response = client.post("/events", json=body, headers=auth(STAFF))
    assert response.status_code == 201, response.text
    return response.json()


class TestSessionEndpoints:
    """Authentication and role resolution."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_missing_token_is_unauthenticated(self, client):
        response = client.get("/me")

        assert response.status_code == 401
        assert response.json()["code"] == "unauthenticated"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_invalid_token_is_unauthenticated(self, client):
        response = client.get("/me", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_me_describes_roles(self, client):
        response = client.get("/me", headers=auth(STAFF_MENTOR))

        assert response.status_code == 200
        data = response.json()
        assert data["active_role"] == "staff"
        assert data["has_access"] is True
        assert set(data["available_roles"]) == {"staff", "mentor"}

    def test_guest_sees_session_without_access(self, client):
        response = client.get("/me", headers=auth(GUEST))

        assert response.status_code == 200
        assert response.json()["has_access"] is False
        assert response.json()["active_role"] == "guest"

    def test_guest_cannot_list_events(self, client):
        response = client.get("/events", headers=auth(GUEST))

        assert response.status_code == 403
        assert response.json()["code"] == "not-authorized"

    def test_mentor_cannot_activate_staff_role(self, client):
        response = client.get("/me", headers=auth(MENTOR, active_role="staff"))

        assert response.status_code == 403

    def test_unknown_role_name_is_invalid(self, client):
        response = client.get("/me", headers=auth(MENTOR, active_role="wizard"))

        assert response.status_code == 422
        assert response.json()["code"] == "invalid"


class TestEventEndpoints:
    """Event lifecycle over HTTP."""

    def test_staff_creates_event_from_product(self, client):
        event = create_event(client)

        assert event["status"] == "new"
        assert event["primary_staff_id"] == str(STAFF.staff_id)
        assert str(MENTOR.mentor_id) in event["initial_selected_mentors"]
        assert event["end_time"] == "11:00:00"

    def test_mentor_cannot_create_event(self, client):
        response = client.post(
            "/events",
            json={
                "company": "Acme Labs",
                "date": next_week().isoformat(),
                "time": "10:00:00",
            },
            headers=auth(MENTOR),
        )

        assert response.status_code == 403

    def test_unknown_product_is_not_found(self, client):
        response = client.post(
            "/events",
            json={
                "company": "Acme Labs",
                "date": next_week().isoformat(),
                "time": "10:00:00",
                "product_id": 99,
            },
            headers=auth(STAFF),
        )

        assert response.status_code == 404

    def test_mentor_lists_visible_events(self, client):
        event = create_event(client)

        response = client.get("/events", headers=auth(MENTOR))

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["events"][0]["event_id"] == event["event_id"]
        assert data["events"][0]["can_request"] is True

    def test_mentor_does_not_see_event_without_product(self, client):
        create_event(client, product_id=None)

        response = client.get("/events", headers=auth(MENTOR))

        assert response.json()["total"] == 0

    def test_search_filters_events(self, client):
        create_event(client, company="Acme Labs")
        create_event(client, company="Globex")

        response = client.get("/events", params={"search": "glob"}, headers=auth(STAFF))

        assert [e["company"] for e in response.json()["events"]] == ["Globex"]

    def test_get_unknown_event(self, client):
        response = client.get(
            "/events/00000000-0000-0000-0000-000000000000", headers=auth(STAFF)
        )

        assert response.status_code == 404
        assert response.json()["code"] == "not-found"

    def test_edit_event(self, client):
        event = create_event(client)

        response = client.patch(
            f"/events/{event['event_id']}",
            json={"company": "Initech", "duration_minutes": 90},
            headers=auth(STAFF),
        )

        assert response.status_code == 200
        assert response.json()["company"] == "Initech"
        assert response.json()["end_time"] == "11:30:00"
        assert response.json()["version"] > event["version"]

    def test_clearing_staff_is_invalid(self, client):
        event = create_event(client)

        response = client.patch(
            f"/events/{event['event_id']}",
            json={"staff_members": None},
            headers=auth(STAFF),
        )

        assert response.status_code == 422
        assert response.json()["code"] == "invalid"

    def test_lock_and_unlock(self, client):
        event = create_event(client)

        locked = client.post(f"/events/{event['event_id']}/lock", headers=auth(STAFF))
        unlocked = client.delete(
            f"/events/{event['event_id']}/lock", headers=auth(STAFF)
        )

        assert locked.status_code == 200
        assert locked.json()["status"] == "locked"
        assert unlocked.json()["status"] == "new"

    def test_delete_event(self, client):
        event = create_event(client)

        response = client.delete(f"/events/{event['event_id']}", headers=auth(STAFF))
        after = client.get(f"/events/{event['event_id']}", headers=auth(STAFF))

        assert response.status_code == 200
        assert after.status_code == 404


class TestMentorRequestEndpoints:
    """Request, withdraw and decide over HTTP."""

    def test_request_then_accept(self, client):
        event = create_event(client)
        event_id = event["event_id"]

        requested = client.post(f"/events/{event_id}/requests", headers=auth(MENTOR))
        accepted = client.post(
            f"/events/{event_id}/mentors/{MENTOR.mentor_id}/accept",
            headers=auth(MANAGER),
        )

        assert requested.status_code == 200
        assert requested.json()["status"] == "firstRequests"
        assert requested.json()["involvement"]["requesting"] is True
        assert accepted.status_code == 200
        assert accepted.json()["accepted_mentors"] == [str(MENTOR.mentor_id)]
        assert accepted.json()["requesting_mentors"] == []
        assert accepted.json()["status"] == "successPartly"

    def test_request_on_hidden_event_is_not_found(self, client):
        event_id = create_event(client, product_id=None)["event_id"]

        response = client.post(f"/events/{event_id}/requests", headers=auth(MENTOR))

        assert response.status_code == 404
        assert "requesting_mentors" not in response.json()

    def test_duplicate_request_conflicts(self, client):
        event_id = create_event(client)["event_id"]
        client.post(f"/events/{event_id}/requests", headers=auth(MENTOR))

        response = client.post(f"/events/{event_id}/requests", headers=auth(MENTOR))

        assert response.status_code == 409
        assert response.json()["code"] == "already-requested"
        assert response.json()["mentor_id"] == str(MENTOR.mentor_id)

    def test_withdraw_request(self, client):
        event_id = create_event(client)["event_id"]
        client.post(f"/events/{event_id}/requests", headers=auth(MENTOR))

        response = client.delete(f"/events/{event_id}/requests", headers=auth(MENTOR))

        assert response.status_code == 200
        assert response.json()["requesting_mentors"] == []
        assert response.json()["status"] == "new"

    def test_staff_cannot_accept(self, client):
        event_id = create_event(client)["event_id"]
        client.post(f"/events/{event_id}/requests", headers=auth(MENTOR))

        response = client.post(
            f"/events/{event_id}/mentors/{MENTOR.mentor_id}/accept",
            headers=auth(STAFF),
        )

        assert response.status_code == 403
        assert response.json()["code"] == "not-authorized"

    def test_decline_request(self, client):
        event_id = create_event(client)["event_id"]
        client.post(f"/events/{event_id}/requests", headers=auth(MENTOR))

        response = client.post(
            f"/events/{event_id}/mentors/{MENTOR.mentor_id}/decline",
            headers=auth(MANAGER),
        )

        assert response.status_code == 200
        assert response.json()["declined_mentors"] == [str(MENTOR.mentor_id)]

    def test_full_event_rejects_new_requests(self, client):
        event_id = create_event(client, required_mentor_count=1)["event_id"]
        client.post(
            f"/events/{event_id}/mentors/{MENTOR.mentor_id}/assign",
            headers=auth(MANAGER),
        )

        response = client.post(
            f"/events/{event_id}/requests", headers=auth(OTHER_MENTOR)
        )

        assert response.status_code == 409
        assert response.json()["code"] == "event-full"

    def test_staff_requests_after_switching_to_mentor(self, client):
        event_id = create_event(client)["event_id"]

        as_staff = client.post(
            f"/events/{event_id}/requests", headers=auth(STAFF_MENTOR)
        )
        as_mentor = client.post(
            f"/events/{event_id}/requests",
            headers=auth(STAFF_MENTOR, active_role="mentor"),
        )

        assert as_staff.status_code == 409
        assert as_staff.json()["code"] == "not-a-mentor"
        assert as_mentor.status_code == 200
        assert str(STAFF_MENTOR.mentor_id) in as_mentor.json()["requesting_mentors"]

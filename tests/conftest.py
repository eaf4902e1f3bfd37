"""Test configuration and fixtures."""

from datetime import date, datetime, time, timedelta
from typing import Iterable, Optional
from uuid import uuid4

import logfire

from booking.config import Settings
from booking.domain.model import Actor, Event, Product
from booking.domain.value import EventId, MentorId, ProductId, Role, StaffId, UserId
from booking.util.jwt import create_token

# Keep test output local
logfire.configure(send_to_logfire=False, console=False)


def next_week() -> date:
    return date.today() + timedelta(days=7)


def make_actor(*roles: Role, display_name: Optional[str] = None) -> Actor:
    """Build an actor holding the given roles, starting in the highest one."""
    return Actor.from_role_names(
        UserId(uuid4()), [r.value for r in roles], display_name=display_name
    )


def make_event(
    staff: Optional[Actor] = None,
    required_mentor_count: int = 2,
    on: Optional[date] = None,
    at: time = time(10, 0),
    initial_selected_mentors: Iterable[MentorId] = (),
    **fields,
) -> Event:
    """Build an upcoming event owned by ``staff`` (or a random staff id)."""
    staff_id = staff.staff_id if staff else StaffId(uuid4())
    now = datetime.now()
    return Event(
        id=EventId(uuid4()),
        company=fields.pop("company", "Acme Labs"),
        date=on or next_week(),
        time=at,
        required_mentor_count=required_mentor_count,
        staff_members=(staff_id,),
        initial_selected_mentors=tuple(initial_selected_mentors),
        created_at=now,
        updated_at=now,
        **fields,
    )


def make_product(
    product_id: int = 1,
    approved_mentors: Iterable[MentorId] = (),
    min_mentor_count: int = 1,
) -> Product:
    return Product(
        id=ProductId(product_id),
        title="Career coaching",
        approved_mentors=tuple(approved_mentors),
        min_mentor_count=min_mentor_count,
    )


def token_for(actor: Actor, roles: Optional[Iterable[str]] = None) -> str:
    """Identity token for the actor as the identity provider would issue it."""
    role_names = (
        list(roles) if roles is not None else [r.value for r in actor.held_roles]
    )
    return create_token(
        str(actor.id), role_names, Settings().auth, name=actor.display_name
    )

"""Event representation returned by event and request use cases."""

import datetime as dt
from typing import Optional

from pydantic import BaseModel

from booking.domain.model import Actor, Event
from booking.domain.service import EventQueryService, PermissionService
from booking.domain.value import EventMode, EventStatus


class InvolvementResponse(BaseModel):
    """The caller's part in the event."""

    requesting: bool
    accepted: bool
    declined: bool
    staff: bool


class EventResponse(BaseModel):
    """Event details as seen by one actor."""

    event_id: str
    company: str
    description: Optional[str]
    date: dt.date
    time: dt.time
    end_time: dt.time
    duration_minutes: int
    mode: EventMode
    teams_link: Optional[str]
    required_mentor_count: int
    requesting_mentors: list[str]
    accepted_mentors: list[str]
    declined_mentors: list[str]
    locked: bool
    status: EventStatus
    staff_members: list[str]
    primary_staff_id: str
    product_id: Optional[int]
    initial_selected_mentors: list[str]
    version: int
    created_at: dt.datetime
    updated_at: dt.datetime
    is_past: bool
    can_request: bool
    involvement: InvolvementResponse

    @classmethod
    def from_event(
        cls,
        event: Event,
        actor: Actor,
        permission_service: PermissionService,
        now: Optional[dt.datetime] = None,
    ) -> "EventResponse":
        involvement = EventQueryService(permission_service).involvement(event, actor)
        return cls(
            event_id=str(event.id),
            company=event.company,
            description=event.description,
            date=event.date,
            time=event.time,
            end_time=event.end_time,
            duration_minutes=event.duration_minutes,
            mode=event.mode,
            teams_link=event.teams_link,
            required_mentor_count=event.required_mentor_count,
            requesting_mentors=[str(m) for m in event.requesting_mentors],
            accepted_mentors=[str(m) for m in event.accepted_mentors],
            declined_mentors=[str(m) for m in event.declined_mentors],
            locked=event.locked,
            status=event.status,
            staff_members=[str(s) for s in event.staff_members],
            primary_staff_id=str(event.primary_staff_id),
            product_id=event.product_id,
            initial_selected_mentors=[str(m) for m in event.initial_selected_mentors],
            version=event.version,
            created_at=event.created_at,
            updated_at=event.updated_at,
            is_past=event.is_in_past(now),
            can_request=permission_service.can_request_mentor(event, actor, now),
            involvement=InvolvementResponse(**involvement.model_dump()),
        )

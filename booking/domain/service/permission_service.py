"""Permission evaluation domain service."""

from datetime import datetime
from typing import Optional

import logfire

from booking.domain.error import PermissionDeniedError
from booking.domain.model import Actor, Event
from booking.domain.value import Capabilities, IneligibilityReason, MembershipSet, Role

from .base import Service

_STAFF_LEVEL = frozenset({Role.SUPER_ADMIN, Role.MENTORING_MANAGEMENT, Role.STAFF})
_ADMINISTRATIVE = frozenset({Role.SUPER_ADMIN, Role.MENTORING_MANAGEMENT})

_ALREADY_IN = {
    MembershipSet.REQUESTING: IneligibilityReason.ALREADY_REQUESTED,
    MembershipSet.ACCEPTED: IneligibilityReason.ALREADY_ACCEPTED,
    MembershipSet.DECLINED: IneligibilityReason.ALREADY_DECLINED,
}


def _build_capabilities(role: Role) -> Capabilities:
    staff_level = role in _STAFF_LEVEL
    administrative = role in _ADMINISTRATIVE
    return Capabilities(
        can_create_events=staff_level,
        can_edit_events=staff_level,
        can_delete_events=staff_level,
        can_manage_products=staff_level,
        can_view_pending_requests=staff_level,
        can_process_mentor_requests=staff_level,
        can_view_mentor_profiles=staff_level,
        can_view_staff_profiles=staff_level,
        can_access_administration=staff_level,
        can_manage_traits=administrative,
        can_manage_mentors=administrative,
        can_view_all_profiles=administrative,
        can_edit_any_profile=administrative,
        can_edit_username=administrative,
        can_view_admin_data=role is Role.SUPER_ADMIN,
        can_manage_accounts=role is Role.SUPER_ADMIN,
        can_assign_mentors=role is Role.MENTORING_MANAGEMENT,
        can_edit_own_profile=False,
    )


CAPABILITY_TABLE: dict[Role, Capabilities] = {
    role: _build_capabilities(role) for role in Role
}


class PermissionService(Service):
    """Maps an actor's active role to capabilities and eligibility.

    Stateless; every method is a pure function of its arguments apart from
    the clock used for past-event checks.
    """

    def capabilities_for(self, actor: Actor) -> Capabilities:
        """Capabilities of the actor's active role."""
        return CAPABILITY_TABLE[actor.active_role]

    def require(self, actor: Actor, capability: str, action: str) -> None:
        """Raise unless the active role carries the capability.

        Args:
            actor: Acting user
            capability: Capabilities field name, e.g. ``can_edit_events``
            action: Human readable description used in the error

        Raises:
            PermissionDeniedError: If the capability is missing
        """
        if not getattr(self.capabilities_for(actor), capability):
            logfire.warn(
                "Permission denied",
                actor_id=str(actor.id),
                role=actor.active_role.value,
                capability=capability,
            )
            raise PermissionDeniedError(
                capability=capability, actor_id=str(actor.id), action=action
            )

    def check_request_eligibility(
        self, event: Event, actor: Actor, now: Optional[datetime] = None
    ) -> Optional[IneligibilityReason]:
        """Return why the actor may not request the event, or None if they may."""
        if actor.active_role is not Role.MENTOR:
            return IneligibilityReason.NOT_A_MENTOR

        current = event.membership.set_of(actor.mentor_id)
        if current is not None:
            return _ALREADY_IN[current]

        if event.is_in_past(now):
            return IneligibilityReason.EVENT_IN_PAST

        if event.is_full:
            return IneligibilityReason.EVENT_FULL

        return None

    def can_request_mentor(
        self, event: Event, actor: Actor, now: Optional[datetime] = None
    ) -> bool:
        """Whether the actor may request to join the event as a mentor."""
        return self.check_request_eligibility(event, actor, now) is None

    def can_mentor_view_event(self, event: Event, actor: Actor) -> bool:
        """Visibility restriction for mentors.

        Mentors only see events whose approved-mentor snapshot lists them;
        every other role sees everything.
        """
        if actor.active_role is not Role.MENTOR:
            return True
        return actor.mentor_id in event.initial_selected_mentors

    def can_edit_event(
        self, event: Event, actor: Actor, now: Optional[datetime] = None
    ) -> bool:
        """Edit rights, restricted to admin data viewers once the event is past."""
        capabilities = self.capabilities_for(actor)
        if not capabilities.can_edit_events:
            return False
        return not event.is_in_past(now) or capabilities.can_view_admin_data

    def can_delete_event(
        self, event: Event, actor: Actor, now: Optional[datetime] = None
    ) -> bool:
        """Delete rights, restricted to admin data viewers once the event is past."""
        capabilities = self.capabilities_for(actor)
        if not capabilities.can_delete_events:
            return False
        return not event.is_in_past(now) or capabilities.can_view_admin_data

    def can_activate(self, actor: Actor, role: Role) -> bool:
        """Role switch rule.

        Held roles may always be activated. An actor whose original role is
        super-admin may activate any assignable role.
        """
        if role not in Role.assignable():
            return False
        return role in actor.held_roles or actor.original_role is Role.SUPER_ADMIN

    def available_roles(self, actor: Actor) -> list[Role]:
        """Roles the actor may switch to, in priority order."""
        return [role for role in Role.assignable() if self.can_activate(actor, role)]

    def switch_role(self, actor: Actor, role: Role) -> Actor:
        """Return the actor with a new active role.

        Raises:
            PermissionDeniedError: If the role may not be activated
        """
        with logfire.span(
            "permission_service.switch_role",
            actor_id=str(actor.id),
            role=role.value,
        ):
            if not self.can_activate(actor, role):
                logfire.warn(
                    "Role activation refused",
                    actor_id=str(actor.id),
                    original_role=actor.original_role.value,
                    role=role.value,
                )
                raise PermissionDeniedError(
                    capability=f"role:{role.value}",
                    actor_id=str(actor.id),
                    action=f"activate role {role.value}",
                )
            return actor.with_active_role(role)

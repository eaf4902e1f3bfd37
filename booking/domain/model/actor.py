"""The acting user of a session."""

from typing import Iterable, Optional

from booking.domain.model.common import DomainModel
from booking.domain.value import MentorId, Role, StaffId, UserId


class Actor(DomainModel):
    """Identity, held roles and the currently active role.

    Held roles come from the identity provider and are trusted as-is.
    ``original_role`` is the role picked at session start and never changes;
    ``active_role`` changes through role switching.
    """

    id: UserId
    display_name: Optional[str] = None
    held_roles: frozenset[Role] = frozenset()
    original_role: Role = Role.GUEST
    active_role: Role = Role.GUEST

    @classmethod
    def from_role_names(
        cls,
        user_id: UserId,
        role_names: Iterable[str],
        display_name: Optional[str] = None,
    ) -> "Actor":
        """Build an actor from raw role names.

        Unknown names are ignored. The starting role is the highest held role
        by priority super-admin, staff, mentoring-management, mentor.
        """
        held: set[Role] = set()
        for name in role_names:
            try:
                role = Role(name)
            except ValueError:
                continue
            if role is not Role.GUEST:
                held.add(role)

        initial = next((r for r in Role.assignable() if r in held), Role.GUEST)
        return cls(
            id=user_id,
            display_name=display_name,
            held_roles=frozenset(held),
            original_role=initial,
            active_role=initial,
        )

    @property
    def has_access(self) -> bool:
        """Whether the actor holds any recognised role."""
        return self.original_role is not Role.GUEST

    @property
    def mentor_id(self) -> MentorId:
        return MentorId(self.id)

    @property
    def staff_id(self) -> StaffId:
        return StaffId(self.id)

    def with_active_role(self, role: Role) -> "Actor":
        return self.model_copy(update={"active_role": role})

"""Strongly typed identifiers for booking domain entities.

Mentors and staff are both actors of the external identity provider; the
separate types only document which side of an event an id belongs to.
"""

from typing import NewType
from uuid import UUID

EventId = NewType("EventId", UUID)
UserId = NewType("UserId", UUID)
MentorId = NewType("MentorId", UUID)
StaffId = NewType("StaffId", UUID)

# Catalog rows are keyed by serial integers
ProductId = NewType("ProductId", int)

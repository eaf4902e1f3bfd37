"""Product catalog entry.

Products are maintained outside the booking engine. An event created from a
product snapshots its approved mentors and minimum mentor count.
"""

from typing import Optional

from pydantic import Field, model_validator

from booking.domain.model.common import DomainModel
from booking.domain.value import MentorId, ProductId


class Product(DomainModel):
    """Read-only catalog descriptor."""

    id: ProductId
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    approved_mentors: tuple[MentorId, ...] = ()
    required_traits: tuple[str, ...] = ()
    min_mentor_count: int = Field(default=1, ge=1)
    max_mentor_count: Optional[int] = Field(default=None, ge=1)
    is_mentor_product: bool = True

    @model_validator(mode="after")
    def validate_mentor_bounds(self) -> "Product":
        if (
            self.max_mentor_count is not None
            and self.max_mentor_count < self.min_mentor_count
        ):
            raise ValueError("max_mentor_count must not be below min_mentor_count")
        return self

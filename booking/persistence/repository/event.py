"""PostgreSQL implementation of Event repository."""

from typing import Any, List, Optional

import logfire
from sqlalchemy import Integer, Time, cast, delete, func, insert, literal, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from booking.domain.error import RemoteWriteError
from booking.domain.model import Event
from booking.domain.repository.event import EventRepository
from booking.domain.value import EventId
from booking.persistence.mappers import (
    event_changes_to_columns,
    event_to_dict,
    row_to_event,
)
from booking.persistence.tables import events_table


class PostgresEventRepository(EventRepository):
    """PostgreSQL implementation of EventRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, event_id: EventId) -> Optional[Event]:
        """Find an event by ID."""
        with logfire.span("event_repository.find_by_id", event_id=str(event_id)):
            stmt = select(events_table).where(events_table.c.id == event_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Event not found", event_id=str(event_id))
                return None

            return row_to_event(row._asdict())

    async def find_all(self) -> List[Event]:
        """Return every event ordered by date, then start time."""
        with logfire.span("event_repository.find_all"):
            stmt = select(events_table).order_by(
                events_table.c.date, events_table.c.time
            )
            result = await self.session.execute(stmt)
            events = [row_to_event(row._asdict()) for row in result.fetchall()]

            logfire.info("Found events", count=len(events))
            return events

    async def insert(self, event: Event) -> Event:
        """Insert a new event."""
        with logfire.span("event_repository.insert", event_id=str(event.id)):
            stmt = (
                insert(events_table)
                .values(**event_to_dict(event))
                .returning(events_table)
            )
            try:
                result = await self.session.execute(stmt)
            except SQLAlchemyError as e:
                logfire.error("Event insert failed", event_id=str(event.id), error=str(e))
                raise RemoteWriteError("event insert", str(e)) from e

            row = result.fetchone()
            return row_to_event(row._asdict())

    async def update(
        self,
        event_id: EventId,
        changes: dict[str, Any],
        expected_version: Optional[int] = None,
    ) -> Optional[Event]:
        """Apply a partial update and bump the version."""
        with logfire.span(
            "event_repository.update",
            event_id=str(event_id),
            fields=sorted(changes),
            expected_version=expected_version,
        ):
            values = event_changes_to_columns(changes)
            if "time" in changes or "duration_minutes" in changes:
                values["end_time"] = self._end_time_expression(changes)
            values["version"] = events_table.c.version + 1
            values["updated_at"] = func.now()

            stmt = update(events_table).where(events_table.c.id == event_id)
            if expected_version is not None:
                stmt = stmt.where(events_table.c.version == expected_version)
            stmt = stmt.values(**values).returning(events_table)

            try:
                result = await self.session.execute(stmt)
            except SQLAlchemyError as e:
                logfire.error("Event update failed", event_id=str(event_id), error=str(e))
                raise RemoteWriteError("event update", str(e)) from e

            row = result.fetchone()
            if not row:
                logfire.warn(
                    "Event update matched no row",
                    event_id=str(event_id),
                    expected_version=expected_version,
                )
                return None

            return row_to_event(row._asdict())

    async def delete(self, event_id: EventId) -> bool:
        """Hard delete an event."""
        with logfire.span("event_repository.delete", event_id=str(event_id)):
            stmt = delete(events_table).where(events_table.c.id == event_id)
            try:
                result = await self.session.execute(stmt)
            except SQLAlchemyError as e:
                logfire.error("Event delete failed", event_id=str(event_id), error=str(e))
                raise RemoteWriteError("event delete", str(e)) from e

            return result.rowcount > 0

    @staticmethod
    def _end_time_expression(changes: dict[str, Any]):
        """SQL for start + duration, using new values where given.

        SET expressions see the pre-update row, so changed inputs are bound
        as literals. time + interval wraps past midnight in PostgreSQL.
        """
        start = (
            literal(changes["time"], Time) if "time" in changes else events_table.c.time
        )
        duration = (
            literal(changes["duration_minutes"], Integer)
            if "duration_minutes" in changes
            else events_table.c.duration_minutes
        )
        return cast(start + func.make_interval(0, 0, 0, 0, 0, duration), Time)

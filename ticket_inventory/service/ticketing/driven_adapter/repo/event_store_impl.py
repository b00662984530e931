from typing import Any, List, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_inventory.platform.constant.column_limit import MAX_INT
from ticket_inventory.platform.database.storage_errors import translate_storage_errors
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.interface.i_event_store import IEventStore
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.enum.event_status import EventStatus
from ticket_inventory.service.ticketing.driven_adapter.model.event_model import EventModel


_EVENT_COLUMNS = tuple(EventModel.__table__.columns)


class EventStoreImpl(IEventStore):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(record: Any) -> Event:
        """Build an Event from an EventModel or a RETURNING row (same attribute names)"""
        return Event(
            id=record.id,
            organizer_id=record.organizer_id,
            title=record.title,
            description=record.description,
            location=record.location,
            category=record.category,
            starts_at=record.starts_at,
            price=record.price,
            capacity=record.capacity,
            attendees=record.attendees,
            status=EventStatus(record.status),
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    @Logger.io
    @translate_storage_errors
    async def get(self, *, event_id: str) -> Optional[Event]:
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.id == event_id)
            .execution_options(populate_existing=True)
        )
        db_event = result.scalar_one_or_none()
        return self._to_entity(db_event) if db_event else None

    @Logger.io
    @translate_storage_errors
    async def get_many(self, *, event_ids: List[str]) -> List[Event]:
        if not event_ids:
            return []
        result = await self.session.execute(
            select(EventModel).where(EventModel.id.in_(set(event_ids)))
        )
        return [self._to_entity(db_event) for db_event in result.scalars().all()]

    @Logger.io
    @translate_storage_errors
    async def conditional_increment_attendees(
        self, *, event_id: str, quantity: int
    ) -> Optional[Event]:
        if quantity > MAX_INT:
            # Larger than any capacity the column can hold, so no row can match
            return None

        # Check and increment in one statement; the row lock taken by UPDATE
        # serializes concurrent purchases of the same event.
        # capacity - quantity cannot leave INTEGER range where attendees + quantity could.
        stmt = (
            update(EventModel)
            .where(
                EventModel.id == event_id,
                EventModel.attendees <= EventModel.capacity - quantity,
            )
            .values(attendees=EventModel.attendees + quantity)
            .returning(*_EVENT_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        return self._to_entity(row) if row else None

    @Logger.io
    @translate_storage_errors
    async def create(self, *, event: Event) -> Event:
        db_event = EventModel(
            id=event.id,
            organizer_id=event.organizer_id,
            title=event.title,
            description=event.description,
            location=event.location,
            category=event.category,
            starts_at=event.starts_at,
            price=event.price,
            capacity=event.capacity,
            attendees=event.attendees,
            status=event.status.value,
        )
        self.session.add(db_event)
        await self.session.flush()
        await self.session.refresh(db_event)
        return self._to_entity(db_event)

    @Logger.io
    @translate_storage_errors
    async def update(self, *, event: Event) -> Optional[Event]:
        stmt = (
            update(EventModel)
            .where(
                EventModel.id == event.id,
                EventModel.attendees <= event.capacity,
            )
            .values(
                title=event.title,
                description=event.description,
                location=event.location,
                category=event.category,
                starts_at=event.starts_at,
                price=event.price,
                capacity=event.capacity,
                status=event.status.value,
            )
            .returning(*_EVENT_COLUMNS)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        return self._to_entity(row) if row else None

    @Logger.io
    @translate_storage_errors
    async def list_active(
        self, *, query: Optional[str] = None, category: Optional[str] = None
    ) -> List[Event]:
        stmt = select(EventModel).where(EventModel.status == EventStatus.ACTIVE.value)

        if query and query.strip():
            pattern = f'%{query.strip()}%'
            stmt = stmt.where(
                or_(
                    EventModel.title.ilike(pattern),
                    EventModel.description.ilike(pattern),
                    EventModel.location.ilike(pattern),
                )
            )
        if category:
            stmt = stmt.where(EventModel.category == category)

        result = await self.session.execute(stmt.order_by(EventModel.starts_at.asc()))
        return [self._to_entity(db_event) for db_event in result.scalars().all()]

    @Logger.io
    @translate_storage_errors
    async def list_by_organizer(self, *, organizer_id: str) -> List[Event]:
        result = await self.session.execute(
            select(EventModel)
            .where(EventModel.organizer_id == organizer_id)
            .order_by(EventModel.starts_at.asc())
        )
        return [self._to_entity(db_event) for db_event in result.scalars().all()]

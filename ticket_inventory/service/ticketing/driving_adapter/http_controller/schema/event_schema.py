from datetime import datetime
from typing import List, Literal, Optional

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from ticket_inventory.platform.constant.column_limit import CATEGORY_LENGTH, MAX_INT, TEXT_LENGTH
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
    VersionedResponse,
)


class EventCreateRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'examples': [
                {
                    'title': 'Tech Innovation Summit 2025',
                    'description': 'Talks and workshops on what ships next.',
                    'location': 'San Francisco Convention Center',
                    'category': 'Technology',
                    'startsAt': '2025-09-15T09:00:00Z',
                    'price': 299,
                    'capacity': 500,
                }
            ]
        },
    )

    title: str = Field(max_length=TEXT_LENGTH)
    starts_at: datetime
    capacity: int = Field(le=MAX_INT)
    price: int = Field(le=MAX_INT)
    description: str = ''
    location: str = Field('', max_length=TEXT_LENGTH)
    category: str = Field('', max_length=CATEGORY_LENGTH)


class EventUpdateRequest(CamelModel):
    title: Optional[str] = Field(None, max_length=TEXT_LENGTH)
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=TEXT_LENGTH)
    category: Optional[str] = Field(None, max_length=CATEGORY_LENGTH)
    starts_at: Optional[datetime] = None
    price: Optional[int] = Field(None, le=MAX_INT)
    capacity: Optional[int] = Field(None, le=MAX_INT)
    status: Optional[Literal['active', 'cancelled', 'completed']] = None


class EventResponse(CamelModel):
    id: str
    organizer_id: str
    title: str
    description: str
    location: str
    category: str
    starts_at: datetime
    price: int
    capacity: int
    attendees: int
    available: int = Field(description='capacity - attendees at read time')
    status: str

    @classmethod
    def from_entity(cls, event: Event) -> 'EventResponse':
        return cls(
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
            available=event.available,
            status=event.status.value,
        )


class EventDetailResponse(VersionedResponse):
    event: EventResponse


class EventListResponse(VersionedResponse):
    events: List[EventResponse]

from datetime import datetime
from typing import Any, Optional

import attrs
import uuid_utils

from ticket_inventory.platform.constant.column_limit import MAX_INT
from ticket_inventory.platform.exception.exceptions import InputValidationError
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.enum.event_status import EventStatus
from ticket_inventory.service.ticketing.domain.ticketing_error import CapacityBelowAttendeesError


# Fields an organizer may change after creation; attendees is never one of them
EDITABLE_FIELDS = frozenset(
    {
        'title',
        'description',
        'location',
        'category',
        'starts_at',
        'price',
        'capacity',
        'status',
    }
)


def _validate_title(title: str) -> None:
    if not title or not title.strip():
        raise InputValidationError('Event title is required')


def _validate_price(price: int) -> None:
    if price < 0:
        raise InputValidationError('Price must not be negative')
    if price > MAX_INT:
        raise InputValidationError(f'Price must not exceed {MAX_INT}')


def _validate_capacity(capacity: int) -> None:
    if capacity < 0:
        raise InputValidationError('Capacity must not be negative')
    if capacity > MAX_INT:
        raise InputValidationError(f'Capacity must not exceed {MAX_INT}')


@attrs.define
class Event:
    id: str
    organizer_id: str
    title: str
    starts_at: datetime
    capacity: int
    price: int
    attendees: int = 0
    description: str = ''
    location: str = ''
    category: str = ''
    status: EventStatus = EventStatus.ACTIVE
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def available(self) -> int:
        return self.capacity - self.attendees

    @property
    def is_active(self) -> bool:
        return self.status == EventStatus.ACTIVE

    def is_owned_by(self, organizer_id: str) -> bool:
        return self.organizer_id == organizer_id

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        organizer_id: str,
        title: str,
        starts_at: datetime,
        capacity: int,
        price: int,
        description: str = '',
        location: str = '',
        category: str = '',
    ) -> 'Event':
        _validate_title(title)
        _validate_capacity(capacity)
        _validate_price(price)

        return cls(
            id=str(uuid_utils.uuid7()),
            organizer_id=organizer_id,
            title=title.strip(),
            description=description,
            location=location,
            category=category,
            starts_at=starts_at,
            capacity=capacity,
            price=price,
            attendees=0,
            status=EventStatus.ACTIVE,
        )

    @Logger.io
    def with_changes(self, **changes: Any) -> 'Event':
        """
        Return a copy with organizer-editable metadata applied.

        The capacity check here runs against the attendees count this copy was
        loaded with; the store re-checks it atomically when writing.
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise InputValidationError(f'Fields cannot be updated: {", ".join(sorted(unknown))}')

        if 'title' in changes:
            _validate_title(changes['title'])
            changes['title'] = changes['title'].strip()
        if 'price' in changes:
            _validate_price(changes['price'])
        if 'capacity' in changes:
            _validate_capacity(changes['capacity'])
            if changes['capacity'] < self.attendees:
                raise CapacityBelowAttendeesError(
                    capacity=changes['capacity'], attendees=self.attendees
                )
        if 'status' in changes:
            changes['status'] = EventStatus(changes['status'])

        return attrs.evolve(self, **changes)

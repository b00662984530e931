from datetime import datetime, timedelta, timezone

import pytest

from ticket_inventory.platform.constant.column_limit import MAX_INT
from ticket_inventory.platform.exception.exceptions import InputValidationError
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.enum.event_status import EventStatus
from ticket_inventory.service.ticketing.domain.ticketing_error import CapacityBelowAttendeesError


STARTS_AT = datetime(2030, 5, 1, 19, 0, tzinfo=timezone.utc)


def _create(**overrides) -> Event:
    params = {
        'organizer_id': 'organizer-1',
        'title': 'Jazz Night',
        'starts_at': STARTS_AT,
        'capacity': 100,
        'price': 40,
    }
    params.update(overrides)
    return Event.create(**params)


@pytest.mark.unit
class TestEventCreate:
    def test_create_starts_active_with_no_attendees(self) -> None:
        # Act
        event = _create(title='  Jazz Night  ')

        # Assert
        assert event.id
        assert event.title == 'Jazz Night'
        assert event.attendees == 0
        assert event.available == 100
        assert event.status == EventStatus.ACTIVE
        assert event.is_owned_by('organizer-1')
        assert not event.is_owned_by('organizer-2')

    def test_create_generates_distinct_ids(self) -> None:
        assert _create().id != _create().id

    @pytest.mark.parametrize(
        'overrides',
        [
            {'title': ''},
            {'title': '   '},
            {'capacity': -1},
            {'price': -5},
            {'capacity': MAX_INT + 1},
            {'price': 10**20},
        ],
    )
    def test_create_rejects_invalid_fields(self, overrides) -> None:
        with pytest.raises(InputValidationError):
            _create(**overrides)

    def test_free_event_with_zero_capacity_is_allowed(self) -> None:
        event = _create(price=0, capacity=0)

        assert event.available == 0


@pytest.mark.unit
class TestEventWithChanges:
    def test_with_changes_returns_updated_copy(self) -> None:
        # Arrange
        event = _create()
        new_start = STARTS_AT + timedelta(days=1)

        # Act
        changed = event.with_changes(title=' Late Jazz ', starts_at=new_start, price=55)

        # Assert
        assert changed.title == 'Late Jazz'
        assert changed.starts_at == new_start
        assert changed.price == 55
        assert event.title == 'Jazz Night'

    def test_with_changes_coerces_status(self) -> None:
        changed = _create().with_changes(status='cancelled')

        assert changed.status == EventStatus.CANCELLED
        assert not changed.is_active

    def test_attendees_is_not_editable(self) -> None:
        with pytest.raises(InputValidationError):
            _create().with_changes(attendees=5)

    def test_capacity_below_attendees_is_rejected(self) -> None:
        # Arrange
        event = _create(capacity=10)
        event.attendees = 6

        # Act & Assert
        with pytest.raises(CapacityBelowAttendeesError) as exc_info:
            event.with_changes(capacity=5)
        assert exc_info.value.status_code == 409

    def test_capacity_may_shrink_to_attendees(self) -> None:
        event = _create(capacity=10)
        event.attendees = 6

        assert event.with_changes(capacity=6).available == 0

from datetime import datetime, timezone

import pytest

from ticket_inventory.platform.exception.exceptions import InputValidationError
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.enum.ticket_status import TicketStatus
from ticket_inventory.service.ticketing.domain.ticketing_error import InvalidQuantityError
from ticket_inventory.service.ticketing.domain.value_object.buyer_info import BuyerInfo


@pytest.mark.unit
class TestBuyerInfo:
    def test_create_strips_whitespace(self) -> None:
        info = BuyerInfo.create(name=' Ada ', email=' ada@example.com ', phone='  ')

        assert info == BuyerInfo(name='Ada', email='ada@example.com', phone=None)

    @pytest.mark.parametrize(
        'name,email',
        [
            (None, 'ada@example.com'),
            ('', 'ada@example.com'),
            ('Ada', None),
            ('Ada', 'not-an-email'),
        ],
    )
    def test_create_rejects_missing_or_malformed_fields(self, name, email) -> None:
        with pytest.raises(InputValidationError):
            BuyerInfo.create(name=name, email=email)


@pytest.mark.unit
class TestTicketCreate:
    def test_create_snapshots_total_price(self, make_event, buyer_info) -> None:
        # Arrange
        event = make_event(price=120)

        # Act
        ticket = Ticket.create(
            event=event, user_id='attendee-1', quantity=3, buyer_info=buyer_info
        )

        # Assert
        assert ticket.total_price == 360
        assert ticket.event_id == event.id
        assert ticket.status == TicketStatus.CONFIRMED
        assert ticket.purchase_date.tzinfo == timezone.utc
        assert ticket.purchase_date <= datetime.now(timezone.utc)
        assert ticket.idempotency_key is None

    def test_free_event_ticket_costs_nothing(self, make_event, buyer_info) -> None:
        ticket = Ticket.create(
            event=make_event(price=0), user_id='attendee-1', quantity=2, buyer_info=buyer_info
        )

        assert ticket.total_price == 0

    def test_create_rejects_zero_quantity(self, make_event, buyer_info) -> None:
        with pytest.raises(InvalidQuantityError) as exc_info:
            Ticket.create(
                event=make_event(), user_id='attendee-1', quantity=0, buyer_info=buyer_info
            )

        assert exc_info.value.status_code == 400

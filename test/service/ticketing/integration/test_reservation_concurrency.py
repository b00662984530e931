"""
Integration tests for the reservation path against a real database

Many purchases race for few seats; the conditional increment must let exactly
`capacity` of them through and the ledger must agree with the counter.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from ticket_inventory.platform.constant.column_limit import MAX_INT
from ticket_inventory.service.ticketing.app.command.create_event_use_case import (
    CreateEventUseCase,
)
from ticket_inventory.service.ticketing.app.command.purchase_tickets_use_case import (
    PurchaseTicketsUseCase,
)
from ticket_inventory.service.ticketing.app.command.reserve_tickets_use_case import (
    ReserveTicketsUseCase,
)
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.ticketing_error import (
    EventNotFoundError,
    InsufficientCapacityError,
    InvalidQuantityError,
)
from ticket_inventory.service.ticketing.domain.value_object.buyer_info import BuyerInfo


@pytest.fixture
def purchase_use_case(uow_factory) -> PurchaseTicketsUseCase:
    return PurchaseTicketsUseCase(
        reserve_tickets=ReserveTicketsUseCase(uow_factory=uow_factory),
        uow_factory=uow_factory,
    )


async def _create_event(uow_factory, *, capacity: int, price: int = 25) -> Event:
    return await CreateEventUseCase(uow_factory=uow_factory).create_event(
        organizer_id='organizer-1',
        title='Sold Out Soon',
        starts_at=datetime.now(timezone.utc) + timedelta(days=7),
        capacity=capacity,
        price=price,
    )


async def _stored_state(uow_factory, event_id: str):
    async with uow_factory() as uow:
        event = await uow.event_store.get(event_id=event_id)
        tickets = await uow.ticket_ledger.list_by_event(event_id=event_id)
    return event, tickets


def _purchase(use_case: PurchaseTicketsUseCase, *, event_id: str, user_id: str, quantity: int = 1):
    return use_case.purchase(
        user_id=user_id,
        event_id=event_id,
        quantity=quantity,
        buyer_name=f'Buyer {user_id}',
        buyer_email=f'{user_id}@example.com',
    )


@pytest.mark.integration
class TestReservationConcurrency:
    @pytest.mark.asyncio
    async def test_ten_buyers_race_for_three_seats(self, uow_factory, purchase_use_case) -> None:
        # Arrange
        event = await _create_event(uow_factory, capacity=3)

        # Act
        results = await asyncio.gather(
            *(
                _purchase(purchase_use_case, event_id=event.id, user_id=f'attendee-{i}')
                for i in range(10)
            ),
            return_exceptions=True,
        )

        # Assert
        succeeded = [r for r in results if not isinstance(r, BaseException)]
        rejected = [r for r in results if isinstance(r, InsufficientCapacityError)]
        assert len(succeeded) == 3
        assert len(rejected) == 7

        stored, tickets = await _stored_state(uow_factory, event.id)
        assert stored.attendees == 3
        assert sum(ticket.quantity for ticket in tickets) == stored.attendees
        assert {ticket.id for ticket in tickets} == {ticket.id for ticket in succeeded}

    @pytest.mark.asyncio
    async def test_last_seat_goes_to_exactly_one_buyer(
        self, uow_factory, purchase_use_case
    ) -> None:
        # Arrange
        event = await _create_event(uow_factory, capacity=1)

        # Act
        results = await asyncio.gather(
            _purchase(purchase_use_case, event_id=event.id, user_id='attendee-1'),
            _purchase(purchase_use_case, event_id=event.id, user_id='attendee-2'),
            return_exceptions=True,
        )

        # Assert
        assert sum(not isinstance(r, BaseException) for r in results) == 1
        assert sum(isinstance(r, InsufficientCapacityError) for r in results) == 1
        stored, tickets = await _stored_state(uow_factory, event.id)
        assert stored.attendees == 1
        assert len(tickets) == 1

    @pytest.mark.asyncio
    async def test_mixed_quantities_never_oversell(self, uow_factory, purchase_use_case) -> None:
        # Arrange
        event = await _create_event(uow_factory, capacity=5)
        quantities = [2, 2, 2, 1, 3, 1]

        # Act
        results = await asyncio.gather(
            *(
                _purchase(purchase_use_case, event_id=event.id, user_id=f'a{i}', quantity=q)
                for i, q in enumerate(quantities)
            ),
            return_exceptions=True,
        )

        # Assert
        assert all(
            not isinstance(r, BaseException) or isinstance(r, InsufficientCapacityError)
            for r in results
        )
        stored, tickets = await _stored_state(uow_factory, event.id)
        assert stored.attendees <= stored.capacity
        assert sum(ticket.quantity for ticket in tickets) == stored.attendees


@pytest.mark.integration
class TestReservationOutcomes:
    @pytest.mark.asyncio
    async def test_purchase_reads_back_with_price_snapshot(
        self, uow_factory, purchase_use_case
    ) -> None:
        # Arrange
        event = await _create_event(uow_factory, capacity=10, price=120)

        # Act
        ticket = await _purchase(purchase_use_case, event_id=event.id, user_id='a1', quantity=3)

        # Assert
        async with uow_factory() as uow:
            changed = (await uow.event_store.get(event_id=event.id)).with_changes(price=999)
            await uow.event_store.update(event=changed)
            await uow.commit()

        stored, tickets = await _stored_state(uow_factory, event.id)
        assert stored.attendees == 3
        assert stored.price == 999
        assert [(t.id, t.total_price) for t in tickets] == [(ticket.id, 360)]

    @pytest.mark.asyncio
    async def test_missing_event_and_zero_quantity(self, uow_factory, purchase_use_case) -> None:
        # Arrange
        event = await _create_event(uow_factory, capacity=2)
        reserve = ReserveTicketsUseCase(uow_factory=uow_factory)

        # Act & Assert
        with pytest.raises(EventNotFoundError):
            await _purchase(purchase_use_case, event_id='does-not-exist', user_id='a1')
        with pytest.raises(InvalidQuantityError):
            await _purchase(purchase_use_case, event_id=event.id, user_id='a1', quantity=0)
        with pytest.raises(EventNotFoundError):
            await reserve.reserve(
                event_id='does-not-exist',
                user_id='a1',
                quantity=0,
                buyer_info=BuyerInfo(name='Ada', email='ada@example.com'),
            )

        stored, tickets = await _stored_state(uow_factory, event.id)
        assert stored.attendees == 0
        assert tickets == []

    @pytest.mark.asyncio
    async def test_sold_out_reports_available_seats(self, uow_factory, purchase_use_case) -> None:
        # Arrange
        event = await _create_event(uow_factory, capacity=3)
        await _purchase(purchase_use_case, event_id=event.id, user_id='a1', quantity=2)

        # Act
        with pytest.raises(InsufficientCapacityError) as exc_info:
            await _purchase(purchase_use_case, event_id=event.id, user_id='a2', quantity=2)

        # Assert
        assert exc_info.value.available == 1
        stored, _ = await _stored_state(uow_factory, event.id)
        assert stored.attendees == 2

    @pytest.mark.asyncio
    async def test_quantity_beyond_integer_range_is_insufficient_capacity(
        self, uow_factory, purchase_use_case
    ) -> None:
        # Arrange
        event = await _create_event(uow_factory, capacity=3)
        await _purchase(purchase_use_case, event_id=event.id, user_id='a1', quantity=1)

        # Act & Assert
        for quantity in (10**20, MAX_INT):
            with pytest.raises(InsufficientCapacityError) as exc_info:
                await _purchase(
                    purchase_use_case, event_id=event.id, user_id='a2', quantity=quantity
                )
            assert exc_info.value.available == 2

        stored, tickets = await _stored_state(uow_factory, event.id)
        assert stored.attendees == 1
        assert len(tickets) == 1

    @pytest.mark.asyncio
    async def test_total_price_beyond_integer_range_is_stored(
        self, uow_factory, purchase_use_case
    ) -> None:
        # Arrange
        event = await _create_event(uow_factory, capacity=10, price=MAX_INT)

        # Act
        ticket = await _purchase(purchase_use_case, event_id=event.id, user_id='a1', quantity=4)

        # Assert
        _, tickets = await _stored_state(uow_factory, event.id)
        assert [t.total_price for t in tickets] == [ticket.total_price] == [4 * MAX_INT]

"""
Unit test configuration for ticketing service.

Provides in-memory test doubles for the event store, the ticket ledger and the
unit of work, so use cases run without a database. Writes made inside a unit
of work are staged on copies and only become visible after commit(), which is
enough to assert rollback behavior.
"""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import attrs
import pytest

from ticket_inventory.platform.database.unit_of_work import AbstractUnitOfWork
from ticket_inventory.service.ticketing.app.interface.i_event_store import IEventStore
from ticket_inventory.service.ticketing.app.interface.i_ticket_ledger import ITicketLedger
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.ticketing_error import DuplicateTicketError
from ticket_inventory.service.ticketing.domain.value_object.buyer_info import BuyerInfo


class InMemoryEventStore(IEventStore):
    def __init__(self, events: Dict[str, Event]) -> None:
        self.events = events

    async def get(self, *, event_id: str) -> Optional[Event]:
        event = self.events.get(event_id)
        return attrs.evolve(event) if event else None

    async def get_many(self, *, event_ids: List[str]) -> List[Event]:
        return [attrs.evolve(self.events[i]) for i in set(event_ids) if i in self.events]

    async def conditional_increment_attendees(
        self, *, event_id: str, quantity: int
    ) -> Optional[Event]:
        event = self.events.get(event_id)
        if event is None or event.attendees + quantity > event.capacity:
            return None
        event.attendees += quantity
        return attrs.evolve(event)

    async def create(self, *, event: Event) -> Event:
        self.events[event.id] = attrs.evolve(event)
        return attrs.evolve(event)

    async def update(self, *, event: Event) -> Optional[Event]:
        stored = self.events.get(event.id)
        if stored is None or stored.attendees > event.capacity:
            return None
        self.events[event.id] = attrs.evolve(event, attendees=stored.attendees)
        return attrs.evolve(self.events[event.id])

    async def list_active(
        self, *, query: Optional[str] = None, category: Optional[str] = None
    ) -> List[Event]:
        return sorted(
            (e for e in self.events.values() if e.is_active),
            key=lambda e: e.starts_at,
        )

    async def list_by_organizer(self, *, organizer_id: str) -> List[Event]:
        return [e for e in self.events.values() if e.organizer_id == organizer_id]


class InMemoryTicketLedger(ITicketLedger):
    def __init__(self, tickets: List[Ticket]) -> None:
        self.tickets = tickets

    async def insert(self, *, ticket: Ticket) -> Ticket:
        if ticket.idempotency_key is not None and any(
            t.event_id == ticket.event_id
            and t.user_id == ticket.user_id
            and t.idempotency_key == ticket.idempotency_key
            for t in self.tickets
        ):
            raise DuplicateTicketError()
        self.tickets.append(ticket)
        return ticket

    async def get_by_idempotency_key(
        self, *, event_id: str, user_id: str, idempotency_key: str
    ) -> Optional[Ticket]:
        for ticket in self.tickets:
            if (
                ticket.event_id == event_id
                and ticket.user_id == user_id
                and ticket.idempotency_key == idempotency_key
            ):
                return ticket
        return None

    async def list_by_user(self, *, user_id: str) -> List[Ticket]:
        return sorted(
            (t for t in self.tickets if t.user_id == user_id),
            key=lambda t: t.purchase_date,
            reverse=True,
        )

    async def list_by_event(self, *, event_id: str) -> List[Ticket]:
        return [t for t in self.tickets if t.event_id == event_id]

    async def sum_total_price_by_events(self, *, event_ids: List[str]) -> int:
        return sum(t.total_price for t in self.tickets if t.event_id in set(event_ids))


class InMemoryState:
    """Committed state shared by every unit of work a factory hands out"""

    def __init__(self) -> None:
        self.events: Dict[str, Event] = {}
        self.tickets: List[Ticket] = []
        self.commits = 0
        self.uow_count = 0

    def add_event(self, event: Event) -> Event:
        self.events[event.id] = event
        return event


class InMemoryUnitOfWork(AbstractUnitOfWork):
    def __init__(self, state: InMemoryState) -> None:
        self.state = state

    async def __aenter__(self) -> 'InMemoryUnitOfWork':
        self.state.uow_count += 1
        self._events = {key: attrs.evolve(event) for key, event in self.state.events.items()}
        self._tickets = list(self.state.tickets)
        self.event_store = InMemoryEventStore(self._events)
        self.ticket_ledger = InMemoryTicketLedger(self._tickets)
        return self

    async def _commit(self) -> None:
        self.state.events = self._events
        self.state.tickets = self._tickets
        self.state.commits += 1

    async def rollback(self) -> None:
        pass


# =============================================================================
# Fixtures
# =============================================================================
@pytest.fixture
def state() -> InMemoryState:
    return InMemoryState()


@pytest.fixture
def fake_uow_factory(state: InMemoryState) -> Callable[[], AbstractUnitOfWork]:
    return lambda: InMemoryUnitOfWork(state)


@pytest.fixture
def make_event() -> Callable[..., Event]:
    def _make(**overrides: Any) -> Event:
        fields: Dict[str, Any] = {
            'id': 'event-1',
            'organizer_id': 'organizer-1',
            'title': 'Jazz Night',
            'starts_at': datetime.now(timezone.utc) + timedelta(days=7),
            'capacity': 10,
            'price': 25,
            'attendees': 0,
            'category': 'Music',
        }
        fields.update(overrides)
        return Event(**fields)

    return _make


@pytest.fixture
def buyer_info() -> BuyerInfo:
    return BuyerInfo(name='Ada Lovelace', email='ada@example.com')

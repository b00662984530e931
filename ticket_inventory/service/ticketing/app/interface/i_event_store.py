"""
Event Store Interface

Durable record of events. `attendees` is the one field under contention and
is only ever changed through conditional_increment_attendees.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ticket_inventory.service.ticketing.domain.entity.event_entity import Event


class IEventStore(ABC):
    @abstractmethod
    async def get(self, *, event_id: str) -> Optional[Event]:
        """
        Get event by ID, reading the latest committed state

        Returns:
            Event entity or None if not found
        """
        pass

    @abstractmethod
    async def get_many(self, *, event_ids: List[str]) -> List[Event]:
        """Get all events whose ID is in event_ids (missing IDs are skipped)"""
        pass

    @abstractmethod
    async def conditional_increment_attendees(
        self, *, event_id: str, quantity: int
    ) -> Optional[Event]:
        """
        Atomically add quantity to attendees if the result stays within capacity

        The check and the increment are a single storage operation, serialized
        against concurrent increments of the same event.

        Args:
            event_id: Event to reserve seats on
            quantity: Seats to add, must be >= 1

        Returns:
            The event as updated, or None when the event is missing or
            does not have `quantity` seats left
        """
        pass

    @abstractmethod
    async def create(self, *, event: Event) -> Event:
        """Persist a new event"""
        pass

    @abstractmethod
    async def update(self, *, event: Event) -> Optional[Event]:
        """
        Write organizer-editable metadata

        attendees is never written. The capacity change is applied only if the
        stored attendees count still fits in it.

        Returns:
            The updated event, or None when the event is missing or the stored
            attendees count exceeds the new capacity
        """
        pass

    @abstractmethod
    async def list_active(
        self, *, query: Optional[str] = None, category: Optional[str] = None
    ) -> List[Event]:
        """
        List active events ordered by start time

        Args:
            query: Case-insensitive match against title, description or location
            category: Exact category match
        """
        pass

    @abstractmethod
    async def list_by_organizer(self, *, organizer_id: str) -> List[Event]:
        pass

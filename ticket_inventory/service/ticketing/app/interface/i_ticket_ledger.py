"""
Ticket Ledger Interface

Append-mostly record of purchases. Tickets are never mutated by the purchase flow.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket


class ITicketLedger(ABC):
    @abstractmethod
    async def insert(self, *, ticket: Ticket) -> Ticket:
        """
        Append a ticket

        Raises:
            DuplicateTicketError: A ticket with the same event, user and
                idempotency key already exists
        """
        pass

    @abstractmethod
    async def get_by_idempotency_key(
        self, *, event_id: str, user_id: str, idempotency_key: str
    ) -> Optional[Ticket]:
        pass

    @abstractmethod
    async def list_by_user(self, *, user_id: str) -> List[Ticket]:
        """Tickets bought by user_id, newest first"""
        pass

    @abstractmethod
    async def list_by_event(self, *, event_id: str) -> List[Ticket]:
        """Tickets sold for event_id, newest first"""
        pass

    @abstractmethod
    async def sum_total_price_by_events(self, *, event_ids: List[str]) -> int:
        """Revenue recorded across the given events"""
        pass

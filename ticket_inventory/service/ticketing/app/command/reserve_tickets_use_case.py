import asyncio
from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from ticket_inventory.platform.config.di import Container
from ticket_inventory.platform.database.unit_of_work import AbstractUnitOfWork
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.ticketing_error import (
    EventNotFoundError,
    InsufficientCapacityError,
    InvalidQuantityError,
)
from ticket_inventory.service.ticketing.domain.value_object.buyer_info import BuyerInfo


def _log_detached_outcome(transaction: 'asyncio.Task[Ticket]') -> None:
    """Report how a reservation ended after its caller was cancelled"""
    if transaction.cancelled():
        return
    if (error := transaction.exception()) is not None:
        Logger.base.warning(f'🚫 [Reserve] caller gone, transaction rolled back: {error!r}')
        return
    ticket = transaction.result()
    Logger.base.warning(
        f'⚠️ [Reserve] caller gone, ticket {ticket.id} committed; '
        'a retry with the same Idempotency-Key returns it'
    )


class ReserveTicketsUseCase:
    """
    Inventory reservation - atomic check-and-increment plus ticket insert

    Flow (one transaction):
    1. Conditionally increment event.attendees by quantity, only if it stays <= capacity
    2. Zero rows updated -> re-read the event to tell EventNotFound from InsufficientCapacity
    3. Snapshot price * quantity into a new Ticket and insert it
    4. Commit; any failure before this rolls back both the increment and the insert

    The capacity check is evaluated by the storage engine on the current row
    state, never against a value read earlier by this process.
    """

    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
    ) -> Self:
        return cls(uow_factory=uow_factory)

    @Logger.io
    async def reserve(
        self,
        *,
        event_id: str,
        user_id: str,
        quantity: int,
        buyer_info: BuyerInfo,
        idempotency_key: Optional[str] = None,
    ) -> Ticket:
        """
        Reserve seats and record the ticket atomically

        Args:
            event_id: Event to buy seats for
            user_id: Buyer
            quantity: Seats requested, must be >= 1
            buyer_info: Contact snapshot stored on the ticket
            idempotency_key: Optional client key stored on the ticket

        Returns:
            The committed ticket

        Raises:
            EventNotFoundError: Event does not exist
            InvalidQuantityError: quantity < 1
            InsufficientCapacityError: Fewer than quantity seats left at commit time
            DuplicateTicketError: idempotency_key already recorded for this event and user
            StorageFailureError: Storage failed; nothing was committed
        """
        with self.tracer.start_as_current_span(
            'use_case.reserve_tickets',
            attributes={
                'event.id': event_id,
                'user.id': user_id,
                'ticket.quantity': quantity,
            },
        ):
            # Runs as its own task: cancelling the caller cannot interrupt it
            # between increment and commit
            transaction = asyncio.create_task(
                self._reserve_in_transaction(
                    event_id=event_id,
                    user_id=user_id,
                    quantity=quantity,
                    buyer_info=buyer_info,
                    idempotency_key=idempotency_key,
                )
            )
            try:
                return await asyncio.shield(transaction)
            except asyncio.CancelledError:
                transaction.add_done_callback(_log_detached_outcome)
                raise

    async def _reserve_in_transaction(
        self,
        *,
        event_id: str,
        user_id: str,
        quantity: int,
        buyer_info: BuyerInfo,
        idempotency_key: Optional[str],
    ) -> Ticket:
        async with self.uow_factory() as uow:
            if quantity < 1:
                # Existence is reported before quantity
                if await uow.event_store.get(event_id=event_id) is None:
                    raise EventNotFoundError(event_id)
                raise InvalidQuantityError(quantity)

            event = await uow.event_store.conditional_increment_attendees(
                event_id=event_id, quantity=quantity
            )
            if event is None:
                current = await uow.event_store.get(event_id=event_id)
                if current is None:
                    raise EventNotFoundError(event_id)
                raise InsufficientCapacityError(
                    event_id=event_id, requested=quantity, available=current.available
                )

            ticket = Ticket.create(
                event=event,
                user_id=user_id,
                quantity=quantity,
                buyer_info=buyer_info,
                idempotency_key=idempotency_key,
            )
            await uow.ticket_ledger.insert(ticket=ticket)
            await uow.commit()

        Logger.base.info(
            f'🎟️ [Reserve] event={event_id} user={user_id} quantity={quantity} '
            f'attendees={event.attendees}/{event.capacity}'
        )
        return ticket

import time
from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace

from ticket_inventory.platform.config.di import Container
from ticket_inventory.platform.database.unit_of_work import AbstractUnitOfWork
from ticket_inventory.platform.exception.exceptions import CustomBaseError, InputValidationError
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.platform.metrics.ticketing_metrics import metrics
from ticket_inventory.service.ticketing.app.command.reserve_tickets_use_case import (
    ReserveTicketsUseCase,
)
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.ticketing_error import (
    DuplicateTicketError,
    IdempotencyKeyConflictError,
    InvalidQuantityError,
)
from ticket_inventory.service.ticketing.domain.value_object.buyer_info import BuyerInfo


MAX_IDEMPOTENCY_KEY_LENGTH = 255


class PurchaseTicketsUseCase:
    """
    Purchase tickets - the boundary operation the front end calls

    Flow:
    1. Validate input (quantity, buyer name/email) before touching storage
    2. Replay: an idempotency key already recorded for this event and buyer
       returns the existing ticket without reserving again
    3. Delegate to ReserveTicketsUseCase for the atomic reservation
    4. A concurrent duplicate key loses at the ledger's unique constraint, its
       whole transaction rolls back, and the winner's ticket is returned

    Role checks (attendees only) happen in the HTTP layer before this runs.
    """

    def __init__(
        self,
        *,
        reserve_tickets: ReserveTicketsUseCase,
        uow_factory: Callable[[], AbstractUnitOfWork],
    ) -> None:
        self.reserve_tickets = reserve_tickets
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
        return cls(
            reserve_tickets=ReserveTicketsUseCase(uow_factory=uow_factory),
            uow_factory=uow_factory,
        )

    @Logger.io
    async def purchase(
        self,
        *,
        user_id: str,
        event_id: str,
        quantity: int,
        buyer_name: Optional[str],
        buyer_email: Optional[str],
        buyer_phone: Optional[str] = None,
        idempotency_key: Optional[str] = None,
    ) -> Ticket:
        """
        Purchase tickets for an event

        Args:
            user_id: Authenticated attendee
            event_id: Event to buy seats for
            quantity: Seats requested
            buyer_name: Required, non-empty
            buyer_email: Required, non-empty
            buyer_phone: Optional
            idempotency_key: Optional client-generated key for safe retries

        Returns:
            The persisted ticket (new, or the one previously recorded for the key)

        Raises:
            InvalidQuantityError: quantity < 1
            InputValidationError: Missing buyer name/email or malformed key
            EventNotFoundError: Event does not exist
            InsufficientCapacityError: Not enough seats left
            IdempotencyKeyConflictError: Key reused for a different quantity
            StorageFailureError: Storage failed; safe to retry
        """
        started = time.perf_counter()
        result = 'error'
        with self.tracer.start_as_current_span(
            'use_case.purchase_tickets',
            attributes={'event.id': event_id, 'user.id': user_id, 'ticket.quantity': quantity},
        ):
            try:
                if quantity < 1:
                    raise InvalidQuantityError(quantity)
                buyer_info = BuyerInfo.create(name=buyer_name, email=buyer_email, phone=buyer_phone)
                idempotency_key = self._normalize_key(idempotency_key)

                if idempotency_key:
                    existing = await self._find_replay(
                        event_id=event_id,
                        user_id=user_id,
                        quantity=quantity,
                        idempotency_key=idempotency_key,
                    )
                    if existing:
                        result = 'replayed'
                        return existing

                try:
                    ticket = await self.reserve_tickets.reserve(
                        event_id=event_id,
                        user_id=user_id,
                        quantity=quantity,
                        buyer_info=buyer_info,
                        idempotency_key=idempotency_key,
                    )
                except DuplicateTicketError:
                    if not idempotency_key:
                        raise
                    existing = await self._find_replay(
                        event_id=event_id,
                        user_id=user_id,
                        quantity=quantity,
                        idempotency_key=idempotency_key,
                    )
                    if existing is None:
                        raise
                    result = 'replayed'
                    return existing

                result = 'success'
                metrics.record_tickets_sold(quantity=quantity)
                return ticket
            except CustomBaseError as e:
                result = e.code.value.lower()
                raise
            finally:
                metrics.record_purchase(result=result, duration=time.perf_counter() - started)

    @staticmethod
    def _normalize_key(idempotency_key: Optional[str]) -> Optional[str]:
        if idempotency_key is None:
            return None
        idempotency_key = idempotency_key.strip()
        if len(idempotency_key) > MAX_IDEMPOTENCY_KEY_LENGTH:
            raise InputValidationError(
                f'Idempotency key must be at most {MAX_IDEMPOTENCY_KEY_LENGTH} characters'
            )
        return idempotency_key or None

    async def _find_replay(
        self, *, event_id: str, user_id: str, quantity: int, idempotency_key: str
    ) -> Optional[Ticket]:
        async with self.uow_factory() as uow:
            existing = await uow.ticket_ledger.get_by_idempotency_key(
                event_id=event_id, user_id=user_id, idempotency_key=idempotency_key
            )
        if existing and existing.quantity != quantity:
            raise IdempotencyKeyConflictError()
        return existing

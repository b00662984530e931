from typing import Callable, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from ticket_inventory.platform.config.di import Container
from ticket_inventory.platform.database.unit_of_work import AbstractUnitOfWork
from ticket_inventory.platform.exception.exceptions import ForbiddenError
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.ticketing_error import EventNotFoundError


class ListTicketsUseCase:
    def __init__(self, *, uow_factory: Callable[[], AbstractUnitOfWork]) -> None:
        self.uow_factory = uow_factory

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
    async def list_my_tickets(self, *, user_id: str) -> List[Ticket]:
        async with self.uow_factory() as uow:
            return await uow.ticket_ledger.list_by_user(user_id=user_id)

    @Logger.io
    async def list_event_tickets(self, *, organizer_id: str, event_id: str) -> List[Ticket]:
        """Tickets sold for an event, visible to its organizer only"""
        async with self.uow_factory() as uow:
            event = await uow.event_store.get(event_id=event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            if not event.is_owned_by(organizer_id):
                raise ForbiddenError('Only the event organizer can view its tickets')

            return await uow.ticket_ledger.list_by_event(event_id=event_id)

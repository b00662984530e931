from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from ticket_inventory.platform.config.di import Container
from ticket_inventory.platform.database.unit_of_work import AbstractUnitOfWork
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.ticketing_error import EventNotFoundError


class GetEventUseCase:
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
    async def get_event(self, *, event_id: str) -> Event:
        async with self.uow_factory() as uow:
            event = await uow.event_store.get(event_id=event_id)

        if event is None:
            raise EventNotFoundError(event_id)
        return event

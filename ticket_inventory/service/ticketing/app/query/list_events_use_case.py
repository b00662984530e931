from typing import Callable, List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from ticket_inventory.platform.config.di import Container
from ticket_inventory.platform.database.unit_of_work import AbstractUnitOfWork
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event


class ListEventsUseCase:
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
    async def list_events(
        self, *, query: Optional[str] = None, category: Optional[str] = None
    ) -> List[Event]:
        """Active events ordered by start time, optionally searched and filtered"""
        async with self.uow_factory() as uow:
            return await uow.event_store.list_active(query=query, category=category or None)

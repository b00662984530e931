from datetime import datetime
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from ticket_inventory.platform.config.di import Container
from ticket_inventory.platform.database.unit_of_work import AbstractUnitOfWork
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event


class CreateEventUseCase:
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
    async def create_event(
        self,
        *,
        organizer_id: str,
        title: str,
        starts_at: datetime,
        capacity: int,
        price: int,
        description: str = '',
        location: str = '',
        category: str = '',
    ) -> Event:
        event = Event.create(
            organizer_id=organizer_id,
            title=title,
            starts_at=starts_at,
            capacity=capacity,
            price=price,
            description=description,
            location=location,
            category=category,
        )

        async with self.uow_factory() as uow:
            created = await uow.event_store.create(event=event)
            await uow.commit()

        Logger.base.info(f'🎪 [Event] created {created.id} capacity={created.capacity}')
        return created

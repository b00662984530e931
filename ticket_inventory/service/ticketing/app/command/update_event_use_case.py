from typing import Any, Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from ticket_inventory.platform.config.di import Container
from ticket_inventory.platform.database.unit_of_work import AbstractUnitOfWork
from ticket_inventory.platform.exception.exceptions import ForbiddenError
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.ticketing_error import (
    CapacityBelowAttendeesError,
    EventNotFoundError,
)


class UpdateEventUseCase:
    """
    Update organizer-authored event metadata

    attendees is never written here. A capacity change is re-checked by the
    store against the stored attendees count, so a purchase committing between
    our read and our write cannot leave attendees > capacity.
    """

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
    async def update_event(self, *, organizer_id: str, event_id: str, **changes: Any) -> Event:
        async with self.uow_factory() as uow:
            event = await uow.event_store.get(event_id=event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            if not event.is_owned_by(organizer_id):
                raise ForbiddenError('Only the event organizer can update this event')

            changed = event.with_changes(**changes)
            updated = await uow.event_store.update(event=changed)
            if updated is None:
                current = await uow.event_store.get(event_id=event_id)
                if current is None:
                    raise EventNotFoundError(event_id)
                raise CapacityBelowAttendeesError(
                    capacity=changed.capacity, attendees=current.attendees
                )
            await uow.commit()

        return updated

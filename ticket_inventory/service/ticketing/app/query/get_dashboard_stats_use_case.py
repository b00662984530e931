from datetime import datetime, timezone
from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from ticket_inventory.platform.config.di import Container
from ticket_inventory.platform.database.unit_of_work import AbstractUnitOfWork
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.dto.dashboard_stats import (
    AttendeeStats,
    OrganizerStats,
)
from ticket_inventory.service.ticketing.domain.entity.user_entity import UserEntity


def _as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


class GetDashboardStatsUseCase:
    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.uow_factory = uow_factory
        self.clock = clock

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
    async def get_stats(self, *, user: UserEntity) -> OrganizerStats | AttendeeStats:
        if user.is_organizer:
            return await self.get_organizer_stats(organizer_id=user.id)
        return await self.get_attendee_stats(user_id=user.id)

    @Logger.io
    async def get_organizer_stats(self, *, organizer_id: str) -> OrganizerStats:
        async with self.uow_factory() as uow:
            events = await uow.event_store.list_by_organizer(organizer_id=organizer_id)
            revenue = await uow.ticket_ledger.sum_total_price_by_events(
                event_ids=[event.id for event in events]
            )

        return OrganizerStats(
            total_events=len(events),
            total_attendees=sum(event.attendees for event in events),
            total_revenue=revenue,
        )

    @Logger.io
    async def get_attendee_stats(self, *, user_id: str) -> AttendeeStats:
        async with self.uow_factory() as uow:
            tickets = await uow.ticket_ledger.list_by_user(user_id=user_id)
            events = await uow.event_store.get_many(
                event_ids=list({ticket.event_id for ticket in tickets})
            )

        now = self.clock()
        return AttendeeStats(
            total_tickets=sum(ticket.quantity for ticket in tickets),
            total_spent=sum(ticket.total_price for ticket in tickets),
            upcoming_events=sum(1 for event in events if _as_utc(event.starts_at) > now),
        )

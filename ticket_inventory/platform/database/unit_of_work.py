"""
Unit of Work Pattern - one database session shared by the event store and the ticket ledger

Architecture:
- UoW owns the session lifecycle
- UoW owns commit/rollback
- Repositories receive the shared session from the UoW
- Use cases coordinate repositories through the UoW, so a purchase either
  commits its attendee increment and its ticket together or neither
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_inventory.platform.exception.exceptions import StorageFailureError


if TYPE_CHECKING:
    from ticket_inventory.service.ticketing.app.interface.i_event_store import IEventStore
    from ticket_inventory.service.ticketing.app.interface.i_ticket_ledger import ITicketLedger


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work for Ticketing Service

    Usage:
        async with uow_factory() as uow:
            event = await uow.event_store.conditional_increment_attendees(...)
            await uow.ticket_ledger.insert(ticket=...)
            await uow.commit()

    Leaving the block without commit() rolls everything back.
    """

    event_store: IEventStore
    ticket_ledger: ITicketLedger

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    """
    SQLAlchemy implementation of Unit of Work

    Each `async with` opens a fresh session from the factory, so one instance
    must not be entered concurrently; use cases take a factory instead.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self.session_factory = session_factory
        self.session: AsyncSession | None = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from ticket_inventory.service.ticketing.driven_adapter.repo.event_store_impl import (
            EventStoreImpl,
        )
        from ticket_inventory.service.ticketing.driven_adapter.repo.ticket_ledger_impl import (
            TicketLedgerImpl,
        )

        self.session = self.session_factory()
        self.event_store = EventStoreImpl(session=self.session)
        self.ticket_ledger = TicketLedgerImpl(session=self.session)

        await super().__aenter__()
        return self

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    async def _commit(self) -> None:
        if self.session is None:
            raise RuntimeError('Unit of work used outside of its context')
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            raise StorageFailureError(f'Commit failed: {type(e).__name__}') from e

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ticket_inventory.platform.database.storage_errors import translate_storage_errors
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.interface.i_ticket_ledger import ITicketLedger
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.domain.enum.ticket_status import TicketStatus
from ticket_inventory.service.ticketing.domain.ticketing_error import DuplicateTicketError
from ticket_inventory.service.ticketing.domain.value_object.buyer_info import BuyerInfo
from ticket_inventory.service.ticketing.driven_adapter.model.ticket_model import TicketModel


class TicketLedgerImpl(ITicketLedger):
    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_ticket: TicketModel) -> Ticket:
        return Ticket(
            id=db_ticket.id,
            event_id=db_ticket.event_id,
            user_id=db_ticket.user_id,
            quantity=db_ticket.quantity,
            total_price=db_ticket.total_price,
            buyer_info=BuyerInfo(
                name=db_ticket.buyer_name,
                email=db_ticket.buyer_email,
                phone=db_ticket.buyer_phone,
            ),
            purchase_date=db_ticket.purchase_date,
            status=TicketStatus(db_ticket.status),
            idempotency_key=db_ticket.idempotency_key,
        )

    @Logger.io
    @translate_storage_errors
    async def insert(self, *, ticket: Ticket) -> Ticket:
        self.session.add(
            TicketModel(
                id=ticket.id,
                event_id=ticket.event_id,
                user_id=ticket.user_id,
                quantity=ticket.quantity,
                total_price=ticket.total_price,
                buyer_name=ticket.buyer_info.name,
                buyer_email=ticket.buyer_info.email,
                buyer_phone=ticket.buyer_info.phone,
                status=ticket.status.value,
                purchase_date=ticket.purchase_date,
                idempotency_key=ticket.idempotency_key,
            )
        )
        try:
            await self.session.flush()
        except IntegrityError as e:
            # The only unique key besides the primary key (a fresh UUID7) is the idempotency key
            if ticket.idempotency_key is not None:
                raise DuplicateTicketError() from e
            raise
        return ticket

    @Logger.io
    @translate_storage_errors
    async def get_by_idempotency_key(
        self, *, event_id: str, user_id: str, idempotency_key: str
    ) -> Optional[Ticket]:
        result = await self.session.execute(
            select(TicketModel).where(
                TicketModel.event_id == event_id,
                TicketModel.user_id == user_id,
                TicketModel.idempotency_key == idempotency_key,
            )
        )
        db_ticket = result.scalar_one_or_none()
        return self._to_entity(db_ticket) if db_ticket else None

    @Logger.io
    @translate_storage_errors
    async def list_by_user(self, *, user_id: str) -> List[Ticket]:
        result = await self.session.execute(
            select(TicketModel)
            .where(TicketModel.user_id == user_id)
            .order_by(TicketModel.purchase_date.desc(), TicketModel.id.desc())
        )
        return [self._to_entity(db_ticket) for db_ticket in result.scalars().all()]

    @Logger.io
    @translate_storage_errors
    async def list_by_event(self, *, event_id: str) -> List[Ticket]:
        result = await self.session.execute(
            select(TicketModel)
            .where(TicketModel.event_id == event_id)
            .order_by(TicketModel.purchase_date.desc(), TicketModel.id.desc())
        )
        return [self._to_entity(db_ticket) for db_ticket in result.scalars().all()]

    @Logger.io
    @translate_storage_errors
    async def sum_total_price_by_events(self, *, event_ids: List[str]) -> int:
        if not event_ids:
            return 0
        result = await self.session.execute(
            select(func.coalesce(func.sum(TicketModel.total_price), 0)).where(
                TicketModel.event_id.in_(set(event_ids))
            )
        )
        return int(result.scalar_one())

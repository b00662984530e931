from datetime import datetime, timezone
from typing import Optional

import attrs
import uuid_utils

from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.domain.entity.event_entity import Event
from ticket_inventory.service.ticketing.domain.enum.ticket_status import TicketStatus
from ticket_inventory.service.ticketing.domain.ticketing_error import InvalidQuantityError
from ticket_inventory.service.ticketing.domain.value_object.buyer_info import BuyerInfo


@attrs.define
class Ticket:
    """
    One purchase covering `quantity` seats of one event.

    total_price and buyer_info are snapshots taken when the purchase commits;
    later changes to the event or the buyer's profile never touch them.
    """

    id: str
    event_id: str
    user_id: str
    quantity: int
    total_price: int
    buyer_info: BuyerInfo
    purchase_date: datetime
    status: TicketStatus = TicketStatus.CONFIRMED
    idempotency_key: Optional[str] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        event: Event,
        user_id: str,
        quantity: int,
        buyer_info: BuyerInfo,
        idempotency_key: Optional[str] = None,
    ) -> 'Ticket':
        if quantity < 1:
            raise InvalidQuantityError(quantity)

        return cls(
            id=str(uuid_utils.uuid7()),
            event_id=event.id,
            user_id=user_id,
            quantity=quantity,
            total_price=event.price * quantity,
            buyer_info=buyer_info,
            purchase_date=datetime.now(timezone.utc),
            status=TicketStatus.CONFIRMED,
            idempotency_key=idempotency_key,
        )

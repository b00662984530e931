from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import ConfigDict, Field, StrictInt
from pydantic.alias_generators import to_camel

from ticket_inventory.platform.constant.column_limit import (
    MAX_INT,
    PHONE_LENGTH,
    TEXT_LENGTH,
)
from ticket_inventory.service.ticketing.domain.entity.ticket_entity import Ticket
from ticket_inventory.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
    VersionedResponse,
)


class BuyerInfoSchema(CamelModel):
    name: Optional[str] = Field(None, max_length=TEXT_LENGTH)
    email: Optional[str] = Field(None, max_length=TEXT_LENGTH)
    phone: Optional[str] = Field(None, max_length=PHONE_LENGTH)



class PurchaseTicketRequest(CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        json_schema_extra={
            'examples': [
                {
                    'eventId': '0192f0c4-6f1e-7c1a-9a53-3c2f8f1d2e10',
                    'quantity': 2,
                    'buyerInfo': {
                        'name': 'Ada Lovelace',
                        'email': 'ada@example.com',
                        'phone': '+44 20 7946 0000',
                    },
                }
            ]
        },
    )

    event_id: str
    # Lower bound is checked by the use case so that it reports INVALID_QUANTITY
    quantity: Annotated[StrictInt, Field(le=MAX_INT)]
    buyer_info: BuyerInfoSchema


class TicketResponse(CamelModel):
    id: str
    event_id: str
    user_id: str
    quantity: int
    total_price: int
    buyer_info: BuyerInfoSchema
    status: str
    purchase_date: datetime

    @classmethod
    def from_entity(cls, ticket: Ticket) -> 'TicketResponse':
        return cls(
            id=ticket.id,
            event_id=ticket.event_id,
            user_id=ticket.user_id,
            quantity=ticket.quantity,
            total_price=ticket.total_price,
            buyer_info=BuyerInfoSchema(
                name=ticket.buyer_info.name,
                email=ticket.buyer_info.email,
                phone=ticket.buyer_info.phone,
            ),
            status=ticket.status.value,
            purchase_date=ticket.purchase_date,
        )


class PurchaseTicketResponse(VersionedResponse):
    ticket: TicketResponse


class TicketListResponse(VersionedResponse):
    tickets: List[TicketResponse]

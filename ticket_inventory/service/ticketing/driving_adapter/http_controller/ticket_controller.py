from typing import Optional

from fastapi import APIRouter, Depends, Header, status
from opentelemetry import trace

from ticket_inventory.platform.constant.column_limit import IDEMPOTENCY_KEY_LENGTH
from ticket_inventory.platform.constant.route_constant import IDEMPOTENCY_KEY_HEADER
from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.command.purchase_tickets_use_case import (
    PurchaseTicketsUseCase,
)
from ticket_inventory.service.ticketing.app.query.list_tickets_use_case import ListTicketsUseCase
from ticket_inventory.service.ticketing.domain.entity.user_entity import UserEntity
from ticket_inventory.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
    require_attendee,
)
from ticket_inventory.service.ticketing.driving_adapter.http_controller.schema.ticket_schema import (
    PurchaseTicketRequest,
    PurchaseTicketResponse,
    TicketListResponse,
    TicketResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/purchase', status_code=status.HTTP_200_OK)
@Logger.io
async def purchase_tickets(
    request: PurchaseTicketRequest,
    idempotency_key: Optional[str] = Header(
        None, alias=IDEMPOTENCY_KEY_HEADER, max_length=IDEMPOTENCY_KEY_LENGTH
    ),
    current_user: UserEntity = Depends(require_attendee),
    use_case: PurchaseTicketsUseCase = Depends(PurchaseTicketsUseCase.depends),
) -> PurchaseTicketResponse:
    with tracer.start_as_current_span('controller.purchase_tickets') as span:
        span.set_attribute('event_id', request.event_id)
        span.set_attribute('quantity', request.quantity)
        span.set_attribute('buyer_id', current_user.id)

        ticket = await use_case.purchase(
            user_id=current_user.id,
            event_id=request.event_id,
            quantity=request.quantity,
            buyer_name=request.buyer_info.name,
            buyer_email=request.buyer_info.email,
            buyer_phone=request.buyer_info.phone,
            idempotency_key=idempotency_key,
        )

        return PurchaseTicketResponse(ticket=TicketResponse.from_entity(ticket))


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_my_tickets(
    current_user: UserEntity = Depends(get_current_user),
    use_case: ListTicketsUseCase = Depends(ListTicketsUseCase.depends),
) -> TicketListResponse:
    """Tickets bought by the caller, newest first."""
    tickets = await use_case.list_my_tickets(user_id=current_user.id)
    return TicketListResponse(tickets=[TicketResponse.from_entity(ticket) for ticket in tickets])

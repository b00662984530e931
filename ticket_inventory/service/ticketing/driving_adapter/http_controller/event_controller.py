from typing import Optional

from fastapi import APIRouter, Depends, status

from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.command.create_event_use_case import (
    CreateEventUseCase,
)
from ticket_inventory.service.ticketing.app.command.update_event_use_case import (
    UpdateEventUseCase,
)
from ticket_inventory.service.ticketing.app.query.get_event_use_case import GetEventUseCase
from ticket_inventory.service.ticketing.app.query.list_events_use_case import ListEventsUseCase
from ticket_inventory.service.ticketing.app.query.list_tickets_use_case import ListTicketsUseCase
from ticket_inventory.service.ticketing.domain.entity.user_entity import UserEntity
from ticket_inventory.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    require_organizer,
)
from ticket_inventory.service.ticketing.driving_adapter.http_controller.schema.event_schema import (
    EventCreateRequest,
    EventDetailResponse,
    EventListResponse,
    EventResponse,
    EventUpdateRequest,
)
from ticket_inventory.service.ticketing.driving_adapter.http_controller.schema.ticket_schema import (
    TicketListResponse,
    TicketResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_event(
    request: EventCreateRequest,
    current_user: UserEntity = Depends(require_organizer),
    use_case: CreateEventUseCase = Depends(CreateEventUseCase.depends),
) -> EventDetailResponse:
    event = await use_case.create_event(
        organizer_id=current_user.id,
        title=request.title,
        description=request.description,
        location=request.location,
        category=request.category,
        starts_at=request.starts_at,
        price=request.price,
        capacity=request.capacity,
    )
    return EventDetailResponse(event=EventResponse.from_entity(event))


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_events(
    q: Optional[str] = None,
    category: Optional[str] = None,
    use_case: ListEventsUseCase = Depends(ListEventsUseCase.depends),
) -> EventListResponse:
    events = await use_case.list_events(query=q, category=category)
    return EventListResponse(events=[EventResponse.from_entity(event) for event in events])


@router.get('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def get_event(
    event_id: str,
    use_case: GetEventUseCase = Depends(GetEventUseCase.depends),
) -> EventDetailResponse:
    event = await use_case.get_event(event_id=event_id)
    return EventDetailResponse(event=EventResponse.from_entity(event))


@router.patch('/{event_id}', status_code=status.HTTP_200_OK)
@Logger.io
async def update_event(
    event_id: str,
    request: EventUpdateRequest,
    current_user: UserEntity = Depends(require_organizer),
    use_case: UpdateEventUseCase = Depends(UpdateEventUseCase.depends),
) -> EventDetailResponse:
    event = await use_case.update_event(
        organizer_id=current_user.id,
        event_id=event_id,
        **request.model_dump(exclude_unset=True, exclude_none=True),
    )
    return EventDetailResponse(event=EventResponse.from_entity(event))


@router.get('/{event_id}/tickets', status_code=status.HTTP_200_OK)
@Logger.io
async def list_event_tickets(
    event_id: str,
    current_user: UserEntity = Depends(require_organizer),
    use_case: ListTicketsUseCase = Depends(ListTicketsUseCase.depends),
) -> TicketListResponse:
    """Tickets sold for an event; organizer of that event only."""
    tickets = await use_case.list_event_tickets(organizer_id=current_user.id, event_id=event_id)
    return TicketListResponse(tickets=[TicketResponse.from_entity(ticket) for ticket in tickets])

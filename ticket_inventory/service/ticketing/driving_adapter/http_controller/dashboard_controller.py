from fastapi import APIRouter, Depends, status

from ticket_inventory.platform.logging.loguru_io import Logger
from ticket_inventory.service.ticketing.app.dto.dashboard_stats import OrganizerStats
from ticket_inventory.service.ticketing.app.query.get_dashboard_stats_use_case import (
    GetDashboardStatsUseCase,
)
from ticket_inventory.service.ticketing.domain.entity.user_entity import UserEntity
from ticket_inventory.service.ticketing.driving_adapter.http_controller.auth.role_auth import (
    get_current_user,
)
from ticket_inventory.service.ticketing.driving_adapter.http_controller.schema.dashboard_schema import (
    AttendeeStatsSchema,
    DashboardStatsResponse,
    OrganizerStatsSchema,
)


router = APIRouter()


@router.get('/stats', status_code=status.HTTP_200_OK)
@Logger.io
async def get_dashboard_stats(
    current_user: UserEntity = Depends(get_current_user),
    use_case: GetDashboardStatsUseCase = Depends(GetDashboardStatsUseCase.depends),
) -> DashboardStatsResponse:
    stats = await use_case.get_stats(user=current_user)

    if isinstance(stats, OrganizerStats):
        return DashboardStatsResponse(
            role='organizer',
            stats=OrganizerStatsSchema(
                total_events=stats.total_events,
                total_attendees=stats.total_attendees,
                total_revenue=stats.total_revenue,
            ),
        )
    return DashboardStatsResponse(
        role='attendee',
        stats=AttendeeStatsSchema(
            total_tickets=stats.total_tickets,
            total_spent=stats.total_spent,
            upcoming_events=stats.upcoming_events,
        ),
    )

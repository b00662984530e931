from typing import Literal

from ticket_inventory.service.ticketing.driving_adapter.http_controller.schema.base_schema import (
    CamelModel,
    VersionedResponse,
)


class OrganizerStatsSchema(CamelModel):
    total_events: int
    total_attendees: int
    total_revenue: int


class AttendeeStatsSchema(CamelModel):
    total_tickets: int
    total_spent: int
    upcoming_events: int


class DashboardStatsResponse(VersionedResponse):
    role: Literal['attendee', 'organizer']
    stats: OrganizerStatsSchema | AttendeeStatsSchema

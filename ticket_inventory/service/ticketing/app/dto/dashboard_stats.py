import attrs


@attrs.define(frozen=True)
class OrganizerStats:
    total_events: int
    total_attendees: int
    total_revenue: int


@attrs.define(frozen=True)
class AttendeeStats:
    total_tickets: int
    total_spent: int
    upcoming_events: int

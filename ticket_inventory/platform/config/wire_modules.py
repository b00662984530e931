"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from ticket_inventory.service.ticketing.app.command import (
    create_event_use_case,
    purchase_tickets_use_case,
    reserve_tickets_use_case,
    update_event_use_case,
)
from ticket_inventory.service.ticketing.app.query import (
    get_dashboard_stats_use_case,
    get_event_use_case,
    list_events_use_case,
    list_tickets_use_case,
)
from ticket_inventory.service.ticketing.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    purchase_tickets_use_case,
    reserve_tickets_use_case,
    create_event_use_case,
    update_event_use_case,
    get_event_use_case,
    list_events_use_case,
    list_tickets_use_case,
    get_dashboard_stats_use_case,
    role_auth,
]

"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from ticket_inventory.service.ticketing.driven_adapter.model.event_model import EventModel
from ticket_inventory.service.ticketing.driven_adapter.model.ticket_model import TicketModel

__all__ = [
    'EventModel',
    'TicketModel',
]

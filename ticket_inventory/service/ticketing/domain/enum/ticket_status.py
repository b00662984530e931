from enum import StrEnum


class TicketStatus(StrEnum):
    CONFIRMED = 'confirmed'
    PAID = 'paid'
    REQUESTING_REFUND = 'requesting_refund'
    REFUNDED = 'refunded'

from ticket_inventory.platform.exception.error_code import ErrorCode
from ticket_inventory.platform.exception.exceptions import (
    ConflictError,
    InputValidationError,
    NotFoundError,
)


class InvalidQuantityError(InputValidationError):
    code = ErrorCode.INVALID_QUANTITY

    def __init__(self, quantity: int) -> None:
        self.quantity = quantity
        super().__init__(f'Quantity must be at least 1, got {quantity}')


class EventNotFoundError(NotFoundError):
    code = ErrorCode.EVENT_NOT_FOUND

    def __init__(self, event_id: str) -> None:
        self.event_id = event_id
        super().__init__('Event not found')


class InsufficientCapacityError(ConflictError):
    """Not enough seats left; the buyer may retry with a smaller quantity"""

    code = ErrorCode.INSUFFICIENT_CAPACITY

    def __init__(self, *, event_id: str, requested: int, available: int) -> None:
        self.event_id = event_id
        self.requested = requested
        self.available = available
        super().__init__(f'Not enough tickets left: requested {requested}, available {available}')


class DuplicateTicketError(ConflictError):
    code = ErrorCode.DUPLICATE_TICKET

    def __init__(self, message: str = 'Ticket already recorded for this idempotency key') -> None:
        super().__init__(message)


class IdempotencyKeyConflictError(ConflictError):
    code = ErrorCode.IDEMPOTENCY_KEY_CONFLICT

    def __init__(self) -> None:
        super().__init__('Idempotency key was already used for a different purchase')


class CapacityBelowAttendeesError(ConflictError):
    code = ErrorCode.CAPACITY_BELOW_ATTENDEES

    def __init__(self, *, capacity: int, attendees: int) -> None:
        self.capacity = capacity
        self.attendees = attendees
        super().__init__(
            f'Capacity {capacity} is lower than the {attendees} tickets already sold'
        )

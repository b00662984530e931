from enum import StrEnum


class ErrorCode(StrEnum):
    VALIDATION_ERROR = 'VALIDATION_ERROR'
    INVALID_QUANTITY = 'INVALID_QUANTITY'
    NOT_AUTHENTICATED = 'NOT_AUTHENTICATED'
    FORBIDDEN = 'FORBIDDEN'
    NOT_FOUND = 'NOT_FOUND'
    EVENT_NOT_FOUND = 'EVENT_NOT_FOUND'
    CONFLICT = 'CONFLICT'
    INSUFFICIENT_CAPACITY = 'INSUFFICIENT_CAPACITY'
    IDEMPOTENCY_KEY_CONFLICT = 'IDEMPOTENCY_KEY_CONFLICT'
    CAPACITY_BELOW_ATTENDEES = 'CAPACITY_BELOW_ATTENDEES'
    DUPLICATE_TICKET = 'DUPLICATE_TICKET'
    STORAGE_FAILURE = 'STORAGE_FAILURE'
    INTERNAL_ERROR = 'INTERNAL_ERROR'

from ticket_inventory.platform.exception.error_code import ErrorCode


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InputValidationError(DomainError):
    """Malformed input; the caller can correct it and retry"""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class AuthenticationError(CustomBaseError):
    code = ErrorCode.NOT_AUTHENTICATED

    def __init__(self, message: str = 'Not authenticated') -> None:
        super().__init__(message, 401)


class ForbiddenError(CustomBaseError):
    code = ErrorCode.FORBIDDEN

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    code = ErrorCode.NOT_FOUND

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    code = ErrorCode.CONFLICT

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class StorageFailureError(CustomBaseError):
    """Transient storage failure; nothing was committed so the whole operation may be retried"""

    code = ErrorCode.STORAGE_FAILURE

    def __init__(self, message: str = 'Storage operation failed') -> None:
        super().__init__(message, 500)

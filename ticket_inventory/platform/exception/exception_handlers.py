from typing import Any, Callable, Coroutine, Sequence

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from ticket_inventory.platform.exception.error_code import ErrorCode
from ticket_inventory.platform.exception.exceptions import CustomBaseError
from ticket_inventory.platform.logging.loguru_io import Logger


# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _error_response(*, status_code: int, detail: Any, code: ErrorCode) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={'detail': jsonable_encoder(detail), 'code': code.value},
    )


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    return _error_response(status_code=error.status_code, detail=error.message, code=error.code)


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(exc),
        code=ErrorCode.VALIDATION_ERROR,
    )


def _describe_validation_errors(errors: Sequence[Any]) -> str:
    """'buyerInfo.name: String should have at most 255 characters; ...'"""
    described = []
    for error in errors:
        location = '.'.join(str(part) for part in error.get('loc', ()) if part != 'body')
        described.append(f'{location}: {error["msg"]}' if location else error['msg'])
    return '; '.join(described) or 'Invalid request'


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=_describe_validation_errors(error.errors()),
        code=ErrorCode.VALIDATION_ERROR,
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if not getattr(exc, '_has_logged', False):
        Logger.base.opt(exception=exc).error(
            f'Unhandled {type(exc).__name__} on {request.method} {request.url.path}'
        )
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail='Internal server error',
        code=ErrorCode.INTERNAL_ERROR,
    )


# Exception handler mapping
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)

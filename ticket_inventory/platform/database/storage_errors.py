from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar, cast

from sqlalchemy.exc import SQLAlchemyError

from ticket_inventory.platform.exception.exceptions import StorageFailureError


_F = TypeVar('_F', bound=Callable[..., Awaitable[Any]])


def translate_storage_errors(func: _F) -> _F:
    """Surface driver errors from a repository method as StorageFailureError."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            raise StorageFailureError(f'{func.__qualname__} failed: {type(e).__name__}') from e

    return cast(_F, wrapper)

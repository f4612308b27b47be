"""
Storage error translation shared by all services.

Every service method that talks to MongoDB is decorated with
storage_operation(); driver and BSON failures leave the method as
StorageError carrying the driver's message, while our own exceptions
(ValidationError, NotFoundError) pass through untouched.
"""

import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from bson.errors import BSONError
from pymongo.errors import PyMongoError

from store_api.exceptions import StorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def storage_operation(action: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Wrap an async service method so storage failures become StorageError."""

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except (PyMongoError, BSONError) as e:
                logger.error("Error %s: %s", action, str(e))
                raise StorageError(
                    message=str(e) or f"Database error while {action}",
                    context={"action": action, "error_type": type(e).__name__},
                ) from e

        return wrapper

    return decorator

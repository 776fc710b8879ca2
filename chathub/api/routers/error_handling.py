"""
API error handling utilities.

Decorator mapping domain exceptions raised by services onto HTTP errors,
so every router reports failures the same way.

Dependencies: fastapi, chathub.core.exceptions
System role: Uniform error translation for HTTP endpoints
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from chathub.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def handle_api_errors(func: F) -> F:
    """
    Decorator to translate service errors into HTTPExceptions.

    - NotFoundError -> 404
    - ValidationError -> 400
    - ValueError -> 404 when the message says "not found", else 400
    - anything else -> 500, logged with traceback
    """

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except NotFoundError as e:
            logger.warning("Resource not found", extra={"error": str(e), **e.details})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": str(e), **e.details})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        except ValueError as e:
            msg = str(e).lower()
            if "not found" in msg or "does not exist" in msg:
                logger.warning("Resource not found (ValueError)", extra={"error": str(e)})
                raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
            logger.warning("Invalid request (ValueError)", extra={"error": str(e)})
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

        except Exception as e:
            logger.exception(
                "Unexpected failure in API operation",
                extra={"endpoint": func.__name__, "error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"An internal error occurred: {e}",
            )

    return wrapper  # type: ignore

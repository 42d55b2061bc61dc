"""Translation of Supabase client failures into application errors."""

import logging
from collections.abc import Awaitable
from typing import TypeVar

import httpx
from postgrest.exceptions import APIError
from storage3.utils import StorageException

from pousada_api.errors import AppError, StorageFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNIQUE_VIOLATION = "23505"
EXCLUSION_VIOLATION = "23P01"


async def run_query(
    operation: str,
    awaitable: Awaitable[T],
    constraint_errors: dict[str, AppError] | None = None,
) -> T:
    """Await a store call, mapping client failures to application errors.

    ``constraint_errors`` maps Postgres error codes to the domain error raised
    in their place; any other failure becomes ``StorageFailure``.
    """
    try:
        return await awaitable
    except APIError as exc:
        mapped = (constraint_errors or {}).get(str(exc.code))
        if mapped is not None:
            raise mapped from exc
        logger.error(
            "Supabase query failed",
            extra={"operation": operation, "code": exc.code},
        )
        raise StorageFailure() from exc
    except (StorageException, httpx.HTTPError) as exc:
        logger.error(
            "Supabase request failed",
            extra={"operation": operation, "error_type": type(exc).__name__},
        )
        raise StorageFailure() from exc

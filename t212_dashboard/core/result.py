"""Result types for railway-oriented programming.

Remote calls, parsing and orchestration steps can all fail in expected
ways (rate limiting, bad credentials, malformed CSV). Those failures are
returned as values instead of raised, so every caller has to decide what
to do with them.

Usage:
    result = await exports_api.list_exports(credential)
    match result:
        case Success(value=descriptors):
            ...
        case Failure(error=error):
            logger.warning("list_failed", error=str(error))
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


# Type alias for Result union
type Result[T, E] = Success[T] | Failure[E]

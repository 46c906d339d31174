"""Explicit outcome values returned by the URL-mapping service.

Service operations never raise for expected failures. Each returns a Result
whose `error` names the failure kind, so callers have to branch on it:

    >>> result = service.resolve('abc123')
    >>> if result.ok:
    ...     redirect(result.value.full_url)
    ... elif result.error is ErrorKind.NOT_FOUND:
    ...     ...
"""

from dataclasses import dataclass
from enum import StrEnum


class ErrorKind(StrEnum):
    INVALID_INPUT = 'INVALID_INPUT'  # malformed or missing full URL / custom alias
    ALIAS_CONFLICT = 'ALIAS_CONFLICT'  # requested or generated alias already in use
    NOT_FOUND = 'NOT_FOUND'  # resolution target absent
    STORE_FAILURE = 'STORE_FAILURE'  # data store unreachable or failing


@dataclass(frozen=True)
class Result[T]:
    value: T | None = None
    error: ErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> 'Result[T]':
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, message: str) -> 'Result[T]':
        return cls(error=error, message=message)

"""Success-or-failure result for raw API calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import FilesComError

T = TypeVar("T")


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Holds either a value or the typed error that prevented it."""

    value: T | None = None
    error: FilesComError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> ApiResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: FilesComError) -> ApiResult[T]:
        return cls(error=error)

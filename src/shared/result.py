"""Success-or-error value returned by the parsing entry points."""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, ParamSpec, TypeVar

from shared.exceptions import GeoError

logger = logging.getLogger(__name__)

T = TypeVar('T')
U = TypeVar('U')
P = ParamSpec('P')


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or the ``GeoError`` that prevented producing it."""

    value: T | None = None
    error: GeoError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            msg = 'Result cannot carry both a value and an error'
            raise TypeError(msg)

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: GeoError) -> Result[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def unwrap(self) -> T:
        """Return the value or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def unwrap_or(self, default: U) -> T | U:
        if self.error is not None:
            return default
        return self.value  # type: ignore[return-value]

    def map(self, func: Callable[[T], U]) -> Result[U]:
        """Apply ``func`` to a successful value; errors pass through untouched."""
        if self.error is not None:
            return Result.failure(self.error)
        try:
            return Result.success(func(self.value))  # type: ignore[arg-type]
        except GeoError as e:
            return Result.failure(e)


def catching(func: Callable[P, T]) -> Callable[P, Result[T]]:
    """Wrap ``func`` so that a raised ``GeoError`` becomes a failed ``Result``.

    Other exceptions are programming errors and propagate unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T]:
        try:
            return Result.success(func(*args, **kwargs))
        except GeoError as e:
            logger.debug('%s rejected input: %s', func.__qualname__, e)
            return Result.failure(e)

    return wrapper

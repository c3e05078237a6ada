"""Ok/Err result values for callers that prefer not to catch exceptions.

``try_parse_workflow`` returns one of these instead of raising, so both
outcomes are handled explicitly:

    result = try_parse_workflow(text)
    if result.is_ok():
        save(result.value)
    else:
        show(result.error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar

from cmdflow.exceptions import TemplateError

__all__ = ["Ok", "Err", "Result"]

T = TypeVar("T")
E = TypeVar("E", bound=TemplateError)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome carrying ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome carrying the error that would have been raised."""

    error: E

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Ok[T] | Err[E]

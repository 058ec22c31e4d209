"""
Result type for the catalog boundary.

Loading catalog files can fail (missing file, bad JSON, wrong schema).
Those failures come back as values instead of exceptions so a caller can
always show *something*:

    from pickit.result import Ok, Err

    result = store.get_affixes_for_slug("ruby_ring")
    if result.is_ok():
        manager.set_catalog(result.unwrap())
    else:
        show_error(result.error)

    affixes = result.unwrap_or([])
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, NoReturn, TypeVar, Union

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """A successful result.

    Example:
        >>> Ok([1, 2]).unwrap()
        [1, 2]
    """

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:
        return self.value

    def map(self, func: Callable[[T], U]) -> Ok[U]:
        """Transform the success value.

        Example:
            >>> Ok(["a", "b"]).map(len)
            Ok(2)
        """
        return Ok(func(self.value))

    @property
    def error(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """A failed result carrying a readable error.

    Example:
        >>> Err("Failed to load affixes for ruby_ring").is_err()
        True
    """

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raises:
            ValueError: Always, since Err has no success value.
        """
        raise ValueError(f"Called unwrap on Err: {self.error}")

    def unwrap_or(self, default: T) -> T:
        return default

    def map(self, func: Callable[[Any], U]) -> "Err[E]":
        return self

    @property
    def value(self) -> None:
        return None

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result = Union[Ok[T], Err[E]]

"""Result type for explicit success/failure flow.

Validator, normalizer, client and dispatcher return a Result instead of
raising, so the error mapper is the only place a failure turns into a
caller-facing message.

    >>> Ok(3).map(lambda n: n + 1)
    Ok(4)
    >>> Err("channel_not_found").map(lambda n: n + 1).unwrap_err()
    'channel_not_found'
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar, cast

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")
F = TypeVar("F")


class Result(Generic[T, E]):
    """Either an Ok value or an Err value, never both. Build with ``Ok()``/``Err()``."""

    __slots__ = ("_value", "_is_ok")

    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value: T | E = value
        self._is_ok = is_ok

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    def unwrap(self) -> T:
        """The Ok value. Raises RuntimeError on Err."""
        if not self._is_ok:
            raise RuntimeError(f"unwrap() on {self!r}")
        return cast(T, self._value)

    def unwrap_err(self) -> E:
        """The Err value. Raises RuntimeError on Ok."""
        if self._is_ok:
            raise RuntimeError(f"unwrap_err() on {self!r}")
        return cast(E, self._value)

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        return Ok(f(cast(T, self._value))) if self._is_ok else cast(Result[U, E], self)

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        """Transform the failure side; how stage failures become ToolErrors."""
        return cast(Result[T, F], self) if self._is_ok else Err(f(cast(E, self._value)))

    def __repr__(self) -> str:
        return f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return (self._is_ok, self._value) == (other._is_ok, other._value)

    def __hash__(self) -> int:
        return hash((self._is_ok, self._value))


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    return Result(value, is_ok=True)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    return Result(error, is_ok=False)

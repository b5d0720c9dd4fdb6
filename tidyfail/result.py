"""Success/failure carriers and their conversion into failures.

`Ok` / `Err` only exist as the input of `unwrap` / `unwrap_color`; there is
no composition algebra.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from .errors import Failure
from .style import emphasize

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]


def _with_cause(message: object, error: object) -> str:
    # Context first, cause second. An empty context is kept as-is.
    return f"{message}: {error}"


def _raise_from(text: str, error: object) -> NoReturn:
    if isinstance(error, BaseException):
        raise Failure(text) from error
    raise Failure(text)


def _check_result(result: object) -> None:
    if not isinstance(result, (Ok, Err)):
        raise TypeError(f"Expected Ok or Err, got {type(result).__name__}")


def unwrap(result: Result[T, E], message: object) -> T:
    """Return the Ok value, or fail with "{message}: {error}".

    Usage:

        data = unwrap(read_config(path), "Could not read config")
    """

    _check_result(result)
    if isinstance(result, Ok):
        return result.value
    _raise_from(_with_cause(message, result.error), result.error)


def unwrap_color(result: Result[T, E], message: object) -> T:
    """Like `unwrap`, but the combined message is printed in bold red."""

    _check_result(result)
    if isinstance(result, Ok):
        return result.value
    _raise_from(emphasize(_with_cause(message, result.error)), result.error)


@contextmanager
def converting(
    message: object,
    *exc_types: type[Exception],
    color: bool = False,
) -> Iterator[None]:
    """Turn exceptions raised in the block into a failure.

    The text is "{message}: {exc}" and the exception is kept as __cause__.
    Catches `Exception` when no types are given.

        with converting("Could not write config", OSError):
            path.write_text(payload)
    """

    catch = exc_types or (Exception,)
    try:
        yield
    except Failure:
        raise
    except catch as exc:
        if color:
            unwrap_color(Err(exc), message)
        unwrap(Err(exc), message)

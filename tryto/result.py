from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from functools import wraps
from typing import Any
from typing import Never
from typing import Self
from typing import overload

from .log import get_logger

logger = get_logger(__name__)


class PredicateError(ValueError):
    """A filtered value did not satisfy its predicate."""

    def __init__(self, value: Any):
        super().__init__(f"Predicate does not hold for {value!r}")
        self.value = value


class NotFailedError(TypeError):
    """The failure of a Success was requested."""


@dataclass(frozen=True)
class Success[T]:
    """A computation that produced a value."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def get(self) -> T:
        return self.value

    def get_or_else(self, default: T, /) -> T:
        return self.value

    def get_or_else_get(self, supplier: Callable[[], T], /) -> T:
        return self.value

    def or_else(self, default: Try[T], /) -> Self:
        return self

    def or_else_get(self, supplier: Callable[[], Try[T]], /) -> Self:
        return self

    def to_optional(self) -> T | None:
        return self.value

    def map[U](self, f: Callable[[T], U], /) -> Try[U]:
        try:
            return Success(f(self.value))
        except Exception as error:
            return Failure(error)

    def flat_map[U](self, f: Callable[[T], Try[U]], /) -> Try[U]:
        try:
            return f(self.value)
        except Exception as error:
            return Failure(error)

    def filter(self, predicate: Callable[[T], object], /) -> Try[T]:
        try:
            if predicate(self.value):
                return self
        except Exception as error:
            return Failure(error)
        return Failure(PredicateError(self.value))

    def foreach(self, f: Callable[[T], object], /) -> Self:
        """Call ``f`` with the value. Exceptions from ``f`` are not caught."""
        f(self.value)
        return self

    def on_exception(self, f: Callable[[Exception], object], /) -> Self:
        return self

    def recover(self, f: Callable[[Exception], T], /) -> Self:
        return self

    def recover_with(self, f: Callable[[Exception], Try[T]], /) -> Self:
        return self

    def failed(self) -> Try[Exception]:
        return Failure(NotFailedError("Success.failed: the computation did not fail"))

    def transform[U](
        self,
        on_success: Callable[[T], Try[U]],
        on_failure: Callable[[Exception], Try[U]],
        /,
    ) -> Try[U]:
        try:
            return on_success(self.value)
        except Exception as error:
            return Failure(error)


@dataclass(frozen=True)
class Failure:
    """A computation that raised an exception instead of producing a value."""

    error: Exception

    def __post_init__(self):
        if not isinstance(self.error, Exception):
            raise TypeError(f"Failure requires an exception, got: {self.error!r}")

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def get(self) -> Never:
        raise self.error

    def get_or_else[T](self, default: T, /) -> T:
        return default

    def get_or_else_get[T](self, supplier: Callable[[], T], /) -> T:
        return supplier()

    def or_else[T](self, default: Try[T], /) -> Try[T]:
        return default

    def or_else_get[T](self, supplier: Callable[[], Try[T]], /) -> Try[T]:
        try:
            return supplier()
        except Exception as error:
            return Failure(error)

    def to_optional(self) -> None:
        return None

    def map(self, f: Callable[[Any], Any], /) -> Self:
        return self

    def flat_map(self, f: Callable[[Any], Any], /) -> Self:
        return self

    def filter(self, predicate: Callable[[Any], object], /) -> Self:
        return self

    def foreach(self, f: Callable[[Any], object], /) -> Self:
        return self

    def on_exception(self, f: Callable[[Exception], object], /) -> Self:
        """Call ``f`` with the error. Exceptions from ``f`` are not caught."""
        f(self.error)
        return self

    def recover[T](self, f: Callable[[Exception], T], /) -> Try[T]:
        try:
            return Success(f(self.error))
        except Exception as error:
            return Failure(error)

    def recover_with[T](self, f: Callable[[Exception], Try[T]], /) -> Try[T]:
        try:
            return f(self.error)
        except Exception as error:
            return Failure(error)

    def failed(self) -> Try[Exception]:
        return Success(self.error)

    def transform[U](
        self,
        on_success: Callable[[Any], Try[U]],
        on_failure: Callable[[Exception], Try[U]],
        /,
    ) -> Try[U]:
        try:
            return on_failure(self.error)
        except Exception as error:
            return Failure(error)


type Try[T] = Success[T] | Failure
"""Either the value of a computation or the exception it raised."""


@overload
def to[T](
    computation: Callable[[], T],
    /,
    on_finally: Callable[[], object] | None = None,
) -> Try[T]: ...
@overload
def to[**A, T](
    computation: None = None,
    /,
    on_finally: Callable[[], object] | None = None,
) -> Callable[[Callable[A, T]], Callable[A, Try[T]]]: ...


def to(computation=None, /, on_finally=None):
    """Run a computation now and capture its outcome as a Try.

    ``on_finally`` runs once after the computation settles, whether or not it
    raised. An exception from ``on_finally`` is logged and dropped, so it never
    changes the returned Try.

    Without a computation, return a decorator that makes every call of the
    decorated function return a Try::

        @to()
        def parse(text: str) -> int:
            return int(text)

        parse("12")  # Success(value=12)
    """
    if computation is None:

        def decorate(fn):
            @wraps(fn)
            def attempt(*args, **kwargs):
                return to(partial(fn, *args, **kwargs), on_finally)

            return attempt

        return decorate

    try:
        return Success(computation())
    except Exception as error:
        return Failure(error)
    finally:
        if on_finally is not None:
            try:
                on_finally()
            except Exception as error:
                logger.debug("cleanup failed", exc_info=error)


def of[T](value: T, /) -> Success[T]:
    return Success(value)


def of_failure(error: Exception, /) -> Failure:
    return Failure(error)

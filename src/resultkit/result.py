"""Result type for carrying the outcome of fallible computations as data.

A ``Result`` is either ``Success(value)`` or ``Failure(error)``:
- Functor: map
- Applicative: apply
- Monad: flat_map (bind)
- Side effects: for_each
- Capture: from_unsafe, wrap (exceptions in, Failure out)
- Release: unwrap (Failure in, exception out)

Operator shorthand (see ``resultkit.operators`` for named forms):

    transform @ result        result.map(transform)
    fn_result * result        result.apply(fn_result)
    result >> transform       result.flat_map(transform)
    transform << result       result.flat_map(transform)

``@`` and ``*`` bind tighter than ``>>``/``<<``, so
``f @ r >> g`` reads as ``(f @ r) >> g``.
"""

from __future__ import annotations

import functools
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Generic,
    NoReturn,
    ParamSpec,
    TypeVar,
    cast,
    overload,
)

from .config import get_settings
from .errors import UnwrapError, describe_error
from .logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type
U = TypeVar("U")  # Mapped success type
P = ParamSpec("P")

_log = get_logger("resultkit.result")

# Flipped once Success and Failure exist; no further variants allowed
_sealed = False


class Result(Generic[T, E]):
    """Closed sum type: exactly one of ``Success`` or ``Failure``.

    Instances are immutable. Failures pass through every combinator as the
    same object, so the error that surfaces at the end of a chain is the one
    first captured.

    Examples:
        >>> Success(5).map(lambda x: x * 2)
        Success(10)
        >>> err = ValueError("nope")
        >>> Failure(err).map(lambda x: x * 2).error_or_none() is err
        True

        Exhaustive consumption:
        >>> match Result.pure("Hello world!").map(len):
        ...     case Success(n):
        ...         print(n)
        ...     case Failure(e):
        ...         print("failed:", e)
        12
    """

    __slots__ = ("_value",)

    _is_ok: ClassVar[bool]

    def __new__(cls, *args: Any, **kwargs: Any) -> Result[T, E]:
        if cls is Result:
            raise TypeError("Result cannot be instantiated directly; use Success() or Failure()")
        return super().__new__(cls)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        if _sealed:
            raise TypeError(f"Result is closed to new variants, cannot subclass as {cls.__name__}")
        super().__init_subclass__(**kwargs)

    def __init__(self, payload: T | E) -> None:
        object.__setattr__(self, "_value", payload)

    def __setattr__(self, name: str, value: object) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> NoReturn:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __reduce__(self) -> tuple[type[Result[T, E]], tuple[T | E]]:
        return (type(self), (self._value,))

    # ─── Construction ─────────────────────────────────────────────────

    @staticmethod
    def pure(value: U) -> Result[U, Any]:
        """Wrap value in Success. Never fails."""
        return pure(value)

    @staticmethod
    def from_unsafe(
        operation: Callable[[], U],
        *,
        exceptions: Sequence[type[BaseException]] | None = None,
    ) -> Result[U, BaseException]:
        """See :func:`from_unsafe`."""
        return from_unsafe(operation, exceptions=exceptions)

    @staticmethod
    def wrap(
        function: Callable[P, U],
        *,
        exceptions: Sequence[type[BaseException]] | None = None,
    ) -> Callable[P, Result[U, BaseException]]:
        """See :func:`wrap`."""
        return wrap(function, exceptions=exceptions)

    # ─── Inspection ───────────────────────────────────────────────────

    def is_success(self) -> bool:
        return self._is_ok

    def is_failure(self) -> bool:
        return not self._is_ok

    # ─── Value Extraction ─────────────────────────────────────────────

    def unwrap(self) -> T:
        """Return the held value, or raise the held error.

        Exception payloads are raised as the same object, starting from the
        traceback captured with the Failure; Python still prepends the
        ``unwrap()`` frame, and raising inside an ``except`` block sets the
        payload's ``__context__`` to the exception being handled. Any other
        payload is raised inside an UnwrapError.

        Raises:
            BaseException: The captured exception on Failure
            UnwrapError: On Failure holding a non-exception payload
        """
        if self._is_ok:
            return cast(T, self._value)
        if isinstance(self._value, BaseException):
            # Restart from the capture-time traceback so repeated unwraps do not pile up frames
            raise self._value.with_traceback(cast("Failure[T, E]", self)._traceback)
        raise UnwrapError(self._value)

    def value_or_none(self) -> T | None:
        """Held value on Success, None on Failure."""
        return cast(T, self._value) if self._is_ok else None

    def error_or_none(self) -> E | None:
        """Held error on Failure, None on Success."""
        return None if self._is_ok else cast(E, self._value)

    # ─── Functor ──────────────────────────────────────────────────────

    def map(self, transform: Callable[[T], U]) -> Result[U, E]:
        """Apply transform to the Success value; Failure passes through unchanged.

        Type signature: Result[T, E] -> (T -> U) -> Result[U, E]
        """
        if self._is_ok:
            return Success(transform(cast(T, self._value)))
        return cast(Result[U, E], self)

    def for_each(self, side_effect: Callable[[T], object]) -> None:
        """Call side_effect with the Success value. No-op on Failure."""
        if self._is_ok:
            side_effect(cast(T, self._value))

    # ─── Monad ────────────────────────────────────────────────────────

    def flat_map(self, transform: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind - sequence a step that can itself fail.

        Type signature: Result[T, E] -> (T -> Result[U, E]) -> Result[U, E]

        Raises:
            TypeError: If transform returns something other than a Result

        Example:
            >>> def parse_int(s: str) -> Result[int, ValueError]:
            ...     return from_unsafe(lambda: int(s))
            >>> Success("42").flat_map(parse_int)
            Success(42)
            >>> Success("x").flat_map(parse_int).is_failure()
            True
        """
        if not self._is_ok:
            return cast(Result[U, E], self)
        out = transform(cast(T, self._value))
        if not isinstance(out, Result):
            raise TypeError(f"flat_map transform must return a Result, got {type(out).__name__}")
        return out

    # ─── Applicative ──────────────────────────────────────────────────

    def apply(self, transform: Result[Callable[[T], U], E]) -> Result[U, E]:
        """Apply a wrapped function to this wrapped value.

        The function side is inspected first: when both sides are failures,
        ``transform``'s failure is returned.

        Type signature: Result[T, E] -> Result[T -> U, E] -> Result[U, E]
        """
        if not isinstance(transform, Result):
            raise TypeError(f"apply expects a Result-wrapped function, got {type(transform).__name__}")
        if not transform._is_ok:
            return cast(Result[U, E], transform)
        if not self._is_ok:
            return cast(Result[U, E], self)
        fn = cast(Callable[[T], U], transform._value)
        return Success(fn(cast(T, self._value)))

    # ─── Operators ────────────────────────────────────────────────────

    def __rmatmul__(self, transform: object) -> Result[Any, E]:
        # transform @ result
        if isinstance(transform, Result) or not callable(transform):
            return NotImplemented
        return self.map(transform)

    def __mul__(self, other: object) -> Result[Any, E]:
        # fn_result * result
        if not isinstance(other, Result):
            return NotImplemented
        return other.apply(self)

    def __rshift__(self, transform: object) -> Result[Any, E]:
        # result >> transform
        if isinstance(transform, Result) or not callable(transform):
            return NotImplemented
        return self.flat_map(transform)

    def __rlshift__(self, transform: object) -> Result[Any, E]:
        # transform << result
        if isinstance(transform, Result) or not callable(transform):
            return NotImplemented
        return self.flat_map(transform)

    # ─── Dunder Methods ───────────────────────────────────────────────

    def __bool__(self) -> bool:
        """True on Success."""
        return self._is_ok

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"

    __str__ = __repr__

    def __eq__(self, other: object) -> bool:
        """Structural equality: same variant and equal payload."""
        if not isinstance(other, Result):
            return NotImplemented
        return self._is_ok == other._is_ok and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._is_ok, self._value))


class Success(Result[T, E]):
    """Completed computation holding its value."""

    __slots__ = ()
    __match_args__ = ("value",)
    _is_ok = True

    @property
    def value(self) -> T:
        return cast(T, self._value)


class Failure(Result[T, E]):
    """Failed computation holding its error payload.

    Exception payloads keep the traceback they had when the Failure was built,
    so ``unwrap()`` always re-raises from the original raise site.
    """

    __slots__ = ("_traceback",)
    __match_args__ = ("error",)
    _is_ok = False

    def __init__(self, payload: E) -> None:
        super().__init__(payload)
        tb = payload.__traceback__ if isinstance(payload, BaseException) else None
        object.__setattr__(self, "_traceback", tb)

    @property
    def error(self) -> E:
        return cast(E, self._value)


_sealed = True


# ═════════════════════════════════════════════════════════════════════════════
# Constructor Functions
# ═════════════════════════════════════════════════════════════════════════════


def pure(value: T) -> Result[T, Any]:
    """Wrap value in Success.

    Type signature: T -> Result[T, E]
    """
    return Success(value)


def from_unsafe(
    operation: Callable[[], T],
    *,
    exceptions: Sequence[type[BaseException]] | None = None,
) -> Result[T, BaseException]:
    """Run operation once and reify its outcome.

    Returns Success with the return value, or Failure holding the raised
    exception object itself. By default every ``Exception`` is captured;
    ``RESULTKIT_CAPTURE_BASE_EXCEPTIONS`` widens that to ``BaseException``.
    ``exceptions`` narrows capture for this call; anything else propagates.

    Example:
        >>> from_unsafe(lambda: "Hello world!").unwrap()
        'Hello world!'
        >>> from_unsafe(lambda: 1 / 0).error_or_none()
        ZeroDivisionError('division by zero')
    """
    settings = get_settings()
    catch = tuple(exceptions) if exceptions is not None else settings.capture_types
    try:
        value = operation()
    except catch as exc:
        if settings.log_captures:
            _log.debug("result.captured", error_type=type(exc).__name__, error=describe_error(exc))
        return Failure(exc)
    return Success(value)


@overload
def wrap(
    function: Callable[P, T],
    *,
    exceptions: Sequence[type[BaseException]] | None = None,
) -> Callable[P, Result[T, BaseException]]: ...
@overload
def wrap(
    function: None = None,
    *,
    exceptions: Sequence[type[BaseException]] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, Result[T, BaseException]]]: ...
def wrap(
    function: Callable[P, T] | None = None,
    *,
    exceptions: Sequence[type[BaseException]] | None = None,
) -> Any:
    """Adapt a raising function into one returning Result.

    Each call runs through ``from_unsafe``. Works as a plain call or as a
    decorator, with or without arguments.

    Example:
        >>> safe_int = wrap(lambda raw: int(raw))
        >>> safe_int("3")
        Success(3)
        >>> @wrap(exceptions=(KeyError,))
        ... def lookup(key: str) -> int:
        ...     return {"a": 1}[key]
        >>> lookup("b").is_failure()
        True
    """

    def decorate(fn: Callable[P, T]) -> Callable[P, Result[T, BaseException]]:
        @functools.wraps(fn)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, BaseException]:
            return from_unsafe(lambda: fn(*args, **kwargs), exceptions=exceptions)

        return wrapper

    return decorate if function is None else decorate(function)

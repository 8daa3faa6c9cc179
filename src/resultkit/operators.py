"""Named forms of the Result operator shorthand.

    fmap(f, r)          f @ r           r.map(f)
    ap(fr, r)           fr * r          r.apply(fr)
    bind(r, f)          r >> f          r.flat_map(f)
    bind_right(f)       f << r          r.flat_map(f)

Precedence: map/apply (``@``, ``*``) bind tighter than flat_map (``>>``,
``<<``); all four are left-associative in Python. Right-to-left
composition of flat_map steps goes through ``bind_right``.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from .result import Result, pure

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


def fmap(transform: Callable[[T], U], result: Result[T, E]) -> Result[U, E]:
    return result.map(transform)


def ap(transform: Result[Callable[[T], U], E], result: Result[T, E]) -> Result[U, E]:
    """Apply wrapped function to wrapped value. Function-side failure wins."""
    return result.apply(transform)


def bind(result: Result[T, E], transform: Callable[[T], Result[U, E]]) -> Result[U, E]:
    return result.flat_map(transform)


def bind_right(*transforms: Callable[[Any], Result[Any, Any]]) -> Callable[[Any], Result[Any, Any]]:
    """Compose flat_map steps right to left.

    ``bind_right(f, g)(v)`` runs ``g`` first, then ``f`` on its success,
    stopping at the first failure. Feed an existing Result with
    ``bind_right(f, g) << r``.

    Raises:
        TypeError: If no transforms are given

    Example:
        >>> from resultkit import Failure, Success
        >>> half = lambda n: Success(n // 2) if n % 2 == 0 else Failure(f"{n} is odd")
        >>> bind_right(half, half)(12)
        Success(3)
        >>> bind_right(half, half) << Success(6)
        Failure('3 is odd')
    """
    if not transforms:
        raise TypeError("bind_right() needs at least one transform")

    def composed(value: Any) -> Result[Any, Any]:
        result: Result[Any, Any] = pure(value)
        for transform in reversed(transforms):
            result = result.flat_map(transform)
        return result

    return composed

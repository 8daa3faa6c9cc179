"""Error types raised at the boundary between Result values and exceptions.

A Result never raises on its own account. The one sanctioned exit back into
exception-based control flow is ``unwrap()``; when the held payload is not an
exception instance it is carried out inside an ``UnwrapError``.
"""

from __future__ import annotations


def describe_error(error: object) -> str:
    """Human-readable description of any failure payload.

    Exceptions render as their message, falling back to the class name when
    the message is empty. Anything else renders via ``str()``.

    Example:
        >>> describe_error(ValueError("bad input"))
        'bad input'
        >>> describe_error(KeyError())
        'KeyError'
        >>> describe_error("disk full")
        'disk full'
    """
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return str(error)


class UnwrapError(RuntimeError):
    """Raised by ``unwrap()`` on a Failure whose payload is not an exception.

    Attributes:
        error: The original failure payload, untouched
    """

    def __init__(self, error: object) -> None:
        self.error = error
        super().__init__(f"unwrap() on Failure: {describe_error(error)}")

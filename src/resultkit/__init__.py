"""Result type for fallible computations.

Carries the outcome of an operation as data: ``Success(value)`` or
``Failure(error)``, with map/apply/flat_map combinators and a single
sanctioned exit back to exceptions via ``unwrap()``.

Example:
    >>> from resultkit import Result, Success, from_unsafe
    >>>
    >>> def read_port(raw: str) -> Result[int, Exception]:
    ...     return from_unsafe(lambda: int(raw))
    >>>
    >>> result = (
    ...     Success("8080")
    ...     .flat_map(read_port)
    ...     .map(lambda port: port + 1)
    ... )
    >>> assert result.unwrap() == 8081
"""

from .config import ResultSettings, clear_settings_cache, get_settings
from .errors import UnwrapError, describe_error
from .logging import configure_logging, get_logger
from .operators import ap, bind, bind_right, fmap
from .result import Failure, Result, Success, from_unsafe, pure, wrap

__version__ = "0.1.0"

__all__ = [
    # Core types
    "Result",
    "Success",
    "Failure",
    # Construction
    "pure",
    "from_unsafe",
    "wrap",
    # Named operator forms
    "fmap",
    "ap",
    "bind",
    "bind_right",
    # Errors
    "UnwrapError",
    "describe_error",
    # Configuration & logging
    "ResultSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
]

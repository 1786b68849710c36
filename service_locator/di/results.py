"""
Adapter result types

Adapters report registry outcomes as values rather than exceptions so the
locator facade can apply one error policy on top:

- mutations return ``Success | Conflict | InternalError``
- queries return ``Value | NotFound | InternalError``
- override/unregister return ``Success | NotFound | InternalError``
- unregister_all returns ``Success | InternalError``
"""

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar, Union

T = TypeVar('T')


@dataclass(frozen=True)
class Success:
    """Mutation applied"""


@dataclass(frozen=True)
class Value(Generic[T]):
    """Query result carrying the resolved value"""
    value: T


@dataclass(frozen=True)
class Conflict:
    """A registration with the same RegistryKey already exists"""
    message: str = ""


@dataclass(frozen=True)
class NotFound:
    """No registration matched the filter"""
    message: str = ""


@dataclass(frozen=True)
class InternalError:
    """Adapter failure; ``error`` holds the captured exception, if any"""
    message: str
    error: Optional[BaseException] = None


RegistrationResult = Union[Success, Conflict, InternalError]
ResolutionResult = Union[Value[Any], NotFound, InternalError]
RemovalResult = Union[Success, NotFound, InternalError]
ClearResult = Union[Success, InternalError]

"""
의존성 주입 시스템 모듈

Service locator facade, adapter contract and the in-memory adapter.
"""

from .adapter import ServiceLocatorAdapter
from .builder import ServiceLocatorBuilder, get_locator, is_initialized, reset_locator
from .keys import RegistryKey
from .lifetime import Lazy, LazyState, Lifetime
from .locator import ServiceLocator
from .registry import InMemoryAdapter, Registration, ServiceRegistry
from .results import Conflict, InternalError, NotFound, Success, Value

__all__ = [
    'ServiceLocator',
    'ServiceLocatorBuilder',
    'ServiceLocatorAdapter',
    'InMemoryAdapter',
    'ServiceRegistry',
    'Registration',
    'RegistryKey',
    'Lazy',
    'LazyState',
    'Lifetime',
    'Success',
    'Value',
    'Conflict',
    'NotFound',
    'InternalError',
    'get_locator',
    'is_initialized',
    'reset_locator',
]

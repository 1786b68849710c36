"""
Service Locator

Framework-agnostic dependency-injection facade with pluggable storage
adapters.
"""

from service_locator.config import LocatorConfig
from service_locator.di import (
    InMemoryAdapter,
    Lazy,
    ServiceLocator,
    ServiceLocatorAdapter,
    ServiceLocatorBuilder,
    get_locator,
    is_initialized,
    reset_locator,
)
from service_locator.exceptions import (
    LocatorException,
    LocatorInternalError,
    CircularDependencyError,
    MissingArgumentError,
    RegistrationConflictError,
    ServiceNotFoundError,
)

__version__ = "1.0.0"

__all__ = [
    'LocatorConfig',
    'ServiceLocator',
    'ServiceLocatorBuilder',
    'ServiceLocatorAdapter',
    'InMemoryAdapter',
    'Lazy',
    'get_locator',
    'is_initialized',
    'reset_locator',
    'LocatorException',
    'LocatorInternalError',
    'CircularDependencyError',
    'MissingArgumentError',
    'RegistrationConflictError',
    'ServiceNotFoundError',
]

"""
Locator builder and global accessor

The process-wide locator is published once by ServiceLocatorBuilder.build().
reset_locator() drops the binding again and is meant for test teardown.
"""

import threading
from typing import Optional

from service_locator.config import LocatorConfig
from service_locator.exceptions import (
    AdapterNotConfiguredError,
    LocatorAlreadyInitializedError,
    LocatorNotInitializedError,
)
from service_locator.logging import get_logger

from .adapter import ServiceLocatorAdapter
from .locator import ServiceLocator

logger = get_logger(__name__)

# 전역 로케이터
_global_locator: Optional[ServiceLocator] = None
_global_lock = threading.Lock()


class ServiceLocatorBuilder:
    """
    Fluent one-shot construction of the global ServiceLocator.

        locator = (
            ServiceLocatorBuilder()
            .with_adapter(InMemoryAdapter())
            .with_config(LocatorConfig(throw_on_error=True))
            .build()
        )
    """

    def __init__(self):
        self._v_adapter: Optional[ServiceLocatorAdapter] = None
        self._v_config: Optional[LocatorConfig] = None

    def with_adapter(self, adapter: ServiceLocatorAdapter) -> 'ServiceLocatorBuilder':
        """Set the storage backend."""
        self._v_adapter = adapter
        return self

    def with_config(self, config: LocatorConfig) -> 'ServiceLocatorBuilder':
        """Set the error and multiplicity policy (defaults to LocatorConfig())."""
        self._v_config = config
        return self

    def build(self) -> ServiceLocator:
        """
        Create and publish the global locator.

        Raises:
            LocatorAlreadyInitializedError: a locator was already published
            AdapterNotConfiguredError: with_adapter() was never called
        """
        global _global_locator
        with _global_lock:
            if _global_locator is not None:
                raise LocatorAlreadyInitializedError()

            if self._v_adapter is None:
                raise AdapterNotConfiguredError()

            _global_locator = ServiceLocator(self._v_adapter, self._v_config)
            logger.debug(f"Global service locator initialized: {_global_locator}")
            return _global_locator


def get_locator() -> ServiceLocator:
    """전역 로케이터 조회"""
    _v_locator = _global_locator
    if _v_locator is None:
        raise LocatorNotInitializedError()
    return _v_locator


def is_initialized() -> bool:
    return _global_locator is not None


def reset_locator() -> None:
    """
    Drop the global locator binding.

    Registrations held by the old locator's adapter are left as they are.
    """
    global _global_locator
    with _global_lock:
        _global_locator = None

"""
서비스 레지스트리 모듈

In-memory storage for registrations and the reference adapter built on it.
"""

import itertools
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional

from service_locator.exceptions import LocatorException
from service_locator.logging import get_logger

from .adapter import ServiceLocatorAdapter
from .keys import RegistryKey
from .lifetime import Lifetime, ServiceLifetime, create_lifetime
from .results import (
    ClearResult,
    Conflict,
    InternalError,
    NotFound,
    RegistrationResult,
    RemovalResult,
    ResolutionResult,
    Success,
    Value,
)

logger = get_logger(__name__)


@dataclass
class Registration:
    """서비스 등록 정보"""
    registry_key: RegistryKey
    lifetime: ServiceLifetime
    interfaces: FrozenSet[Any]
    insertion_order: int

    @property
    def service_type(self) -> Any:
        return self.registry_key.service_type

    @property
    def lifetime_type(self) -> Lifetime:
        return self.lifetime.get_lifetime_type()

    def matches(self, service_type: Any, name: Optional[str], key: Any, environment: Optional[str]) -> bool:
        return self.registry_key.matches_filter(service_type, self.interfaces, name, key, environment)

    def materialize(self, locator: Any, named_args: Dict[str, Any]) -> Any:
        return self.lifetime.get_instance(locator, named_args)


class ServiceRegistry:
    """
    Thread-safe registration store.

    Registrations are kept in insertion order. Insertion numbers come from
    a counter that is never rewound, so the order of surviving
    registrations is stable across unregister/override.
    """

    def __init__(self):
        self._v_registrations: List[Registration] = []
        self._v_counter = itertools.count()
        self._v_lock = threading.RLock()

    def add(
        self,
        registry_key: RegistryKey,
        lifetime: ServiceLifetime,
        interfaces: Optional[Iterable[Any]],
        allow_multiple_instances: bool,
    ) -> Optional[Registration]:
        """Store a registration; returns None on a RegistryKey conflict."""
        with self._v_lock:
            if not allow_multiple_instances and any(
                r.registry_key.matches(registry_key) for r in self._v_registrations
            ):
                return None

            _v_registration = Registration(
                registry_key=registry_key,
                lifetime=lifetime,
                interfaces=frozenset(interfaces or ()),
                insertion_order=next(self._v_counter),
            )
            self._v_registrations.append(_v_registration)
            return _v_registration

    def find(self, service_type: Any, name: Optional[str], key: Any, environment: Optional[str]) -> List[Registration]:
        """Matching registrations, earliest first."""
        with self._v_lock:
            return [
                r for r in self._v_registrations
                if r.matches(service_type, name, key, environment)
            ]

    def replace(
        self,
        service_type: Any,
        name: Optional[str],
        key: Any,
        environment: Optional[str],
        make_lifetime: Callable[[Registration], ServiceLifetime],
    ) -> int:
        """Swap the lifetime of every match in place; returns the match count."""
        with self._v_lock:
            _v_matches = self.find(service_type, name, key, environment)
            for registration in _v_matches:
                registration.lifetime = make_lifetime(registration)
            return len(_v_matches)

    def remove(self, service_type: Any, name: Optional[str], key: Any, environment: Optional[str]) -> int:
        """Remove every match; returns the number removed."""
        with self._v_lock:
            _v_before = len(self._v_registrations)
            self._v_registrations = [
                r for r in self._v_registrations
                if not r.matches(service_type, name, key, environment)
            ]
            return _v_before - len(self._v_registrations)

    def discard(self, registration: Registration) -> None:
        with self._v_lock:
            self._v_registrations = [r for r in self._v_registrations if r is not registration]

    def clear(self) -> int:
        with self._v_lock:
            _v_count = len(self._v_registrations)
            self._v_registrations = []
            return _v_count

    def get_all_registrations(self) -> List[Registration]:
        with self._v_lock:
            return list(self._v_registrations)

    def get_lifecycle_stats(self) -> Dict[str, int]:
        """생명주기 통계 조회"""
        _v_stats: Dict[str, int] = {}
        with self._v_lock:
            for registration in self._v_registrations:
                _v_type = registration.lifetime_type.value
                _v_stats[_v_type] = _v_stats.get(_v_type, 0) + 1
        return _v_stats

    def __len__(self) -> int:
        return len(self._v_registrations)

    def __str__(self) -> str:
        return f"ServiceRegistry(registrations={len(self._v_registrations)})"

    def __repr__(self) -> str:
        return self.__str__()


def _type_name(service_type: Any) -> str:
    return getattr(service_type, '__qualname__', None) or str(service_type)


class InMemoryAdapter(ServiceLocatorAdapter):
    """
    Reference adapter keeping registrations in process memory.

    Exceptions raised while building a value are reported as InternalError,
    except LocatorException subclasses (missing factory arguments, or errors
    from nested locator calls inside a factory), which propagate unchanged.
    """

    def __init__(self, registry: Optional[ServiceRegistry] = None):
        self._v_registry = registry if registry is not None else ServiceRegistry()

    @property
    def registry(self) -> ServiceRegistry:
        return self._v_registry

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register_instance(self, service_type, instance, *, interfaces, name, key, environment,
                          allow_multiple_instances) -> RegistrationResult:
        return self._register(
            RegistryKey(service_type, name, key, environment),
            lambda: create_lifetime(service_type, Lifetime.INSTANCE, instance),
            interfaces,
            allow_multiple_instances,
        )

    def register_factory(self, service_type, factory, *, interfaces, name, key, environment,
                         allow_multiple_instances, required_args=None) -> RegistrationResult:
        return self._register(
            RegistryKey(service_type, name, key, environment),
            lambda: create_lifetime(service_type, Lifetime.FACTORY, factory, required_args=required_args),
            interfaces,
            allow_multiple_instances,
        )

    def register_lazy(self, service_type, lazy, *, interfaces, name, key, environment,
                      allow_multiple_instances, eager=False) -> RegistrationResult:
        _v_key = RegistryKey(service_type, name, key, environment)
        _v_result = self._register(
            _v_key,
            lambda: create_lifetime(service_type, Lifetime.LAZY, lazy),
            interfaces,
            allow_multiple_instances,
            keep=True,
        )
        if not isinstance(_v_result, Registration):
            return _v_result

        if eager:
            try:
                _v_result.materialize(None, {})
            except LocatorException:
                self._v_registry.discard(_v_result)
                raise
            except Exception as e:
                self._v_registry.discard(_v_result)
                return InternalError(f"Eager construction of '{_v_key.describe()}' failed: {e}", e)
        return Success()

    def _register(
        self,
        registry_key: RegistryKey,
        make_lifetime: Callable[[], ServiceLifetime],
        interfaces: Optional[Iterable[Any]],
        allow_multiple_instances: bool,
        keep: bool = False,
    ):
        try:
            _v_registration = self._v_registry.add(
                registry_key, make_lifetime(), interfaces, allow_multiple_instances
            )
        except Exception as e:
            return InternalError(f"Failed to store registration '{registry_key.describe()}': {e}", e)

        if _v_registration is None:
            return Conflict(f"Registration already exists for '{registry_key.describe()}'")

        logger.debug(
            f"Registered {_v_registration.lifetime_type.value} '{registry_key.describe()}' "
            f"(order={_v_registration.insertion_order})"
        )
        return _v_registration if keep else Success()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def resolve(self, service_type, *, locator, name, key, environment, named_args,
                resolve_first) -> ResolutionResult:
        _v_matches = self._v_registry.find(service_type, name, key, environment)
        if not _v_matches:
            return NotFound(f"No registration found for '{_type_name(service_type)}'")

        _v_selected = _v_matches[0] if resolve_first else _v_matches[-1]
        return self._materialize([_v_selected], locator, named_args, single=True)

    def resolve_all(self, service_type, *, locator, name, key, environment, named_args) -> ResolutionResult:
        _v_matches = self._v_registry.find(service_type, name, key, environment)
        if not _v_matches:
            return NotFound(f"No registration found for '{_type_name(service_type)}'")
        return self._materialize(_v_matches, locator, named_args, single=False)

    def _materialize(self, registrations: List[Registration], locator: Any,
                     named_args: Dict[str, Any], single: bool) -> ResolutionResult:
        _v_values = []
        for registration in registrations:
            try:
                _v_values.append(registration.materialize(locator, named_args))
            except LocatorException:
                raise
            except Exception as e:
                return InternalError(
                    f"Failed to resolve '{registration.registry_key.describe()}': {e}", e
                )
        return Value(_v_values[0] if single else _v_values)

    # ------------------------------------------------------------------
    # Override / removal
    # ------------------------------------------------------------------
    def override_instance(self, service_type, instance, *, name, key, environment) -> RemovalResult:
        return self._override(
            service_type, name, key, environment,
            lambda r: create_lifetime(r.service_type, Lifetime.INSTANCE, instance),
        )

    def override_factory(self, service_type, factory, *, name, key, environment,
                         required_args=None) -> RemovalResult:
        return self._override(
            service_type, name, key, environment,
            lambda r: create_lifetime(r.service_type, Lifetime.FACTORY, factory, required_args=required_args),
        )

    def _override(self, service_type, name, key, environment,
                  make_lifetime: Callable[[Registration], ServiceLifetime]) -> RemovalResult:
        try:
            _v_count = self._v_registry.replace(service_type, name, key, environment, make_lifetime)
        except Exception as e:
            return InternalError(f"Failed to override '{_type_name(service_type)}': {e}", e)

        if _v_count == 0:
            return NotFound(f"No registration found for '{_type_name(service_type)}'")
        logger.debug(f"Overrode {_v_count} registration(s) of '{_type_name(service_type)}'")
        return Success()

    def unregister(self, service_type, *, name, key, environment) -> RemovalResult:
        try:
            _v_count = self._v_registry.remove(service_type, name, key, environment)
        except Exception as e:
            return InternalError(f"Failed to unregister '{_type_name(service_type)}': {e}", e)

        if _v_count == 0:
            return NotFound(f"No registration found for '{_type_name(service_type)}'")
        logger.debug(f"Unregistered {_v_count} registration(s) of '{_type_name(service_type)}'")
        return Success()

    def unregister_all(self) -> ClearResult:
        try:
            _v_count = self._v_registry.clear()
        except Exception as e:
            return InternalError(f"Failed to clear registrations: {e}", e)
        logger.debug(f"Cleared {_v_count} registration(s)")
        return Success()

    def __str__(self) -> str:
        return (
            f"InMemoryAdapter(registrations={len(self._v_registry)}, "
            f"lifecycles={self._v_registry.get_lifecycle_stats()})"
        )

    def __repr__(self) -> str:
        return self.__str__()

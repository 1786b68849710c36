"""
서비스 로케이터 모듈

ServiceLocator is the caller-facing facade. It forwards every operation to
its adapter and turns the adapter's result variants into return values,
warnings or exceptions according to LocatorConfig:

==============  ==========================  ===============================
outcome         throw_on_error=True         throw_on_error=False
==============  ==========================  ===============================
Conflict        RegistrationConflictError   warning, registration dropped
NotFound        ServiceNotFoundError        warning, None / [] / no-op
InternalError   LocatorInternalError        LocatorInternalError
==============  ==========================  ===============================

MissingArgumentError raised by a factory always propagates.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Type, TypeVar, Union

from service_locator.config import LocatorConfig
from service_locator.exceptions import (
    LocatorInternalError,
    RegistrationConflictError,
    ServiceNotFoundError,
)
from service_locator.logging import get_logger

from .adapter import ServiceLocatorAdapter
from .lifetime import FactoryFunc, Lazy
from .messages import (
    internal_error_occurred,
    no_registration_found,
    registration_already_exists,
    type_name,
)
from .results import Conflict, InternalError, NotFound, Value

T = TypeVar('T')

logger = get_logger(__name__)


class ServiceLocator:
    """
    Registers and resolves services under a (type, name, key, environment)
    identity.

    Usually obtained through ServiceLocatorBuilder and get_locator(), but a
    locator can also be constructed directly and passed around explicitly.
    """

    def __init__(self, adapter: ServiceLocatorAdapter, config: Optional[LocatorConfig] = None):
        if adapter is None:
            raise TypeError("ServiceLocator requires an adapter")
        self._v_adapter = adapter
        self._v_config = config if config is not None else LocatorConfig()

    @property
    def adapter(self) -> ServiceLocatorAdapter:
        return self._v_adapter

    @property
    def config(self) -> LocatorConfig:
        return self._v_config

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------
    def register_instance(
        self,
        service_type: Type[T],
        instance: T,
        *,
        interfaces: Optional[Iterable[type]] = None,
        name: Optional[str] = None,
        key: Any = None,
        environment: Optional[str] = None,
    ) -> 'ServiceLocator':
        """
        Register a fixed instance.

        Args:
            service_type: type the instance is registered under
            instance: value returned by every resolution
            interfaces: additional types the instance can be resolved by
            name: optional registration name
            key: optional opaque qualifier
            environment: optional environment tag
        """
        _v_result = self._v_adapter.register_instance(
            service_type,
            instance,
            interfaces=_as_interfaces(interfaces),
            name=name,
            key=key,
            environment=environment,
            allow_multiple_instances=self._v_config.allow_multiple_instances,
        )
        self._handle_registration(_v_result, service_type, name, key, environment)
        return self

    def register_factory(
        self,
        service_type: Type[T],
        factory: Callable[['ServiceLocator', Dict[str, Any]], T],
        *,
        interfaces: Optional[Iterable[type]] = None,
        name: Optional[str] = None,
        key: Any = None,
        environment: Optional[str] = None,
        required_args: Optional[Iterable[str]] = None,
    ) -> 'ServiceLocator':
        """
        Register a factory called as ``factory(locator, named_args)`` on
        every resolution.

        ``required_args`` lists the named arguments the factory cannot do
        without; resolving without one of them raises MissingArgumentError.
        """
        _check_factory(factory)
        _v_result = self._v_adapter.register_factory(
            service_type,
            factory,
            interfaces=_as_interfaces(interfaces),
            name=name,
            key=key,
            environment=environment,
            allow_multiple_instances=self._v_config.allow_multiple_instances,
            required_args=required_args,
        )
        self._handle_registration(_v_result, service_type, name, key, environment)
        return self

    def register_lazy(
        self,
        service_type: Type[T],
        factory: Union[Callable[[], T], Lazy],
        *,
        interfaces: Optional[Iterable[type]] = None,
        name: Optional[str] = None,
        key: Any = None,
        environment: Optional[str] = None,
        eager: bool = False,
    ) -> 'ServiceLocator':
        """
        Register a singleton built by a zero-argument constructor on first
        resolution, or immediately when ``eager`` is set.
        """
        _v_lazy = factory if isinstance(factory, Lazy) else Lazy(factory)
        _v_result = self._v_adapter.register_lazy(
            service_type,
            _v_lazy,
            interfaces=_as_interfaces(interfaces),
            name=name,
            key=key,
            environment=environment,
            allow_multiple_instances=self._v_config.allow_multiple_instances,
            eager=eager,
        )
        self._handle_registration(_v_result, service_type, name, key, environment)
        return self

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def resolve(
        self,
        service_type: Type[T],
        *,
        name: Optional[str] = None,
        key: Any = None,
        environment: Optional[str] = None,
        named_args: Optional[Dict[str, Any]] = None,
        resolve_first: bool = True,
    ) -> Optional[T]:
        """
        Resolve one service.

        Among several matches the earliest registration wins, or the latest
        when ``resolve_first`` is False. Returns None when nothing matches
        and throw_on_error is off.
        """
        _v_result = self._v_adapter.resolve(
            service_type,
            locator=self,
            name=name,
            key=key,
            environment=environment,
            named_args=dict(named_args or {}),
            resolve_first=resolve_first,
        )
        if isinstance(_v_result, Value):
            return _v_result.value
        self._handle_failure(_v_result, service_type, name, key, environment)
        return None

    def resolve_all(
        self,
        service_type: Type[T],
        *,
        name: Optional[str] = None,
        key: Any = None,
        environment: Optional[str] = None,
        named_args: Optional[Dict[str, Any]] = None,
    ) -> List[T]:
        """Resolve every match in registration order."""
        _v_result = self._v_adapter.resolve_all(
            service_type,
            locator=self,
            name=name,
            key=key,
            environment=environment,
            named_args=dict(named_args or {}),
        )
        if isinstance(_v_result, Value):
            return list(_v_result.value)
        self._handle_failure(_v_result, service_type, name, key, environment)
        return []

    # ------------------------------------------------------------------
    # Override / removal
    # ------------------------------------------------------------------
    def override_instance(
        self,
        service_type: Type[T],
        instance: T,
        *,
        name: Optional[str] = None,
        key: Any = None,
        environment: Optional[str] = None,
    ) -> 'ServiceLocator':
        """Replace the payload of every matching registration with ``instance``."""
        _v_result = self._v_adapter.override_instance(
            service_type,
            instance,
            name=name,
            key=key,
            environment=environment,
        )
        self._handle_failure(_v_result, service_type, name, key, environment)
        return self

    def override_factory(
        self,
        service_type: Type[T],
        factory: FactoryFunc,
        *,
        name: Optional[str] = None,
        key: Any = None,
        environment: Optional[str] = None,
        required_args: Optional[Iterable[str]] = None,
    ) -> 'ServiceLocator':
        """Replace the payload of every matching registration with ``factory``."""
        _check_factory(factory)
        _v_result = self._v_adapter.override_factory(
            service_type,
            factory,
            name=name,
            key=key,
            environment=environment,
            required_args=required_args,
        )
        self._handle_failure(_v_result, service_type, name, key, environment)
        return self

    def unregister(
        self,
        service_type: Type[T],
        *,
        name: Optional[str] = None,
        key: Any = None,
        environment: Optional[str] = None,
    ) -> 'ServiceLocator':
        """Remove every matching registration."""
        _v_result = self._v_adapter.unregister(
            service_type,
            name=name,
            key=key,
            environment=environment,
        )
        self._handle_failure(_v_result, service_type, name, key, environment)
        return self

    def unregister_all(self) -> 'ServiceLocator':
        """Remove every registration. The global locator binding is kept."""
        _v_result = self._v_adapter.unregister_all()
        if isinstance(_v_result, InternalError):
            self._raise_internal(_v_result, {})
        return self

    # ------------------------------------------------------------------
    # Error policy
    # ------------------------------------------------------------------
    def _handle_registration(self, result: Any, service_type: Any, name, key, environment) -> None:
        if isinstance(result, Conflict):
            _v_message = registration_already_exists(service_type)
            _v_context = _context(service_type, name, key, environment)
            if self._v_config.throw_on_error:
                raise RegistrationConflictError(_v_message, service_type=service_type, context=_v_context)
            logger.warning(_v_message, extra=_log_extra(_v_context))
        elif isinstance(result, InternalError):
            self._raise_internal(result, _context(service_type, name, key, environment))

    def _handle_failure(self, result: Any, service_type: Any, name, key, environment) -> None:
        if isinstance(result, NotFound):
            _v_message = no_registration_found(service_type)
            _v_context = _context(service_type, name, key, environment)
            if self._v_config.throw_on_error:
                raise ServiceNotFoundError(_v_message, service_type=service_type, context=_v_context)
            logger.warning(_v_message, extra=_log_extra(_v_context))
        elif isinstance(result, InternalError):
            self._raise_internal(result, _context(service_type, name, key, environment))

    def _raise_internal(self, result: InternalError, context: Dict[str, Any]) -> None:
        _v_message = internal_error_occurred(result.message)
        _v_exc_info = (
            (type(result.error), result.error, result.error.__traceback__)
            if result.error is not None else None
        )
        logger.critical(_v_message, exc_info=_v_exc_info, extra=_log_extra(context))
        raise LocatorInternalError(_v_message, context=context, original_error=result.error) from result.error

    def __str__(self) -> str:
        return f"ServiceLocator(adapter={self._v_adapter!r}, config={self._v_config!r})"

    def __repr__(self) -> str:
        return self.__str__()


def _as_interfaces(interfaces: Optional[Iterable[type]]):
    if interfaces is None:
        return None
    return frozenset(interfaces)


def _context(service_type: Any, name: Optional[str], key: Any, environment: Optional[str]) -> Dict[str, Any]:
    _v_context: Dict[str, Any] = {'service_type': type_name(service_type)}
    if name is not None:
        _v_context['name'] = name
    if key is not None:
        _v_context['key'] = key
    if environment is not None:
        _v_context['environment'] = environment
    return _v_context


def _log_extra(context: Dict[str, Any]) -> Dict[str, Any]:
    # LogRecord reserves 'name'
    _v_extra = {'service_type': context.get('service_type')}
    if 'name' in context:
        _v_extra['registration_name'] = context['name']
    if 'key' in context:
        _v_extra['registration_key'] = context['key']
    if 'environment' in context:
        _v_extra['environment'] = context['environment']
    return _v_extra


def _check_factory(factory: Any) -> None:
    if not callable(factory):
        raise TypeError(f"Factory must be callable, got {type(factory).__name__}")

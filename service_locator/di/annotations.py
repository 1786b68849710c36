"""
서비스 등록 데코레이터

Class decorators registering the decorated class on a locator (the global
one unless ``locator`` is given) at import time:

    @register_lazy(interfaces=[Repository])
    class SqlRepository(Repository):
        ...

The class itself is returned unchanged.
"""

import inspect
from typing import Any, Callable, Iterable, List, Optional, Type, TypeVar

from .builder import get_locator
from .locator import ServiceLocator

T = TypeVar('T')


def _target(locator: Optional[ServiceLocator]) -> ServiceLocator:
    return locator if locator is not None else get_locator()


def required_constructor_args(cls: type) -> List[str]:
    """Keyword-passable ``__init__`` parameters without a default value."""
    _v_signature = inspect.signature(cls.__init__)
    _v_required = []
    for param_name, param in _v_signature.parameters.items():
        if param_name == 'self':
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD,
                          inspect.Parameter.POSITIONAL_ONLY):
            continue
        if param.default is inspect.Parameter.empty:
            _v_required.append(param_name)
    return _v_required


def register_instance(service_type: Any = None,
                      *,
                      interfaces: Optional[Iterable[type]] = None,
                      name: Optional[str] = None,
                      key: Any = None,
                      environment: Optional[str] = None,
                      locator: Optional[ServiceLocator] = None) -> Callable[[Type[T]], Type[T]]:
    """Instantiate the class with no arguments and register the instance."""
    def decorator(cls: Type[T]) -> Type[T]:
        _target(locator).register_instance(
            service_type or cls,
            cls(),
            interfaces=interfaces,
            name=name,
            key=key,
            environment=environment,
        )
        return cls
    return decorator


def register_factory(service_type: Any = None,
                     *,
                     interfaces: Optional[Iterable[type]] = None,
                     name: Optional[str] = None,
                     key: Any = None,
                     environment: Optional[str] = None,
                     locator: Optional[ServiceLocator] = None) -> Callable[[Type[T]], Type[T]]:
    """
    Register the class as a factory.

    Each resolution calls ``cls(**named_args)``; constructor parameters
    without defaults become the factory's required named arguments.
    """
    def decorator(cls: Type[T]) -> Type[T]:
        def _factory(_locator: ServiceLocator, named_args: dict) -> T:
            return cls(**named_args)

        _target(locator).register_factory(
            service_type or cls,
            _factory,
            interfaces=interfaces,
            name=name,
            key=key,
            environment=environment,
            required_args=required_constructor_args(cls),
        )
        return cls
    return decorator


def register_lazy(service_type: Any = None,
                  *,
                  interfaces: Optional[Iterable[type]] = None,
                  name: Optional[str] = None,
                  key: Any = None,
                  environment: Optional[str] = None,
                  eager: bool = False,
                  locator: Optional[ServiceLocator] = None) -> Callable[[Type[T]], Type[T]]:
    """Register the class as a lazy singleton built with no arguments."""
    def decorator(cls: Type[T]) -> Type[T]:
        _target(locator).register_lazy(
            service_type or cls,
            cls,
            interfaces=interfaces,
            name=name,
            key=key,
            environment=environment,
            eager=eager,
        )
        return cls
    return decorator

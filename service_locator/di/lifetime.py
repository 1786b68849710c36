"""
서비스 생명주기 관리 모듈

Lifecycle variants of a registration:

- Instance: a fixed value returned unchanged on every resolution
- Factory: ``factory(locator, named_args)`` invoked on every resolution
- Lazy: a zero-argument constructor run once, on first resolution
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Generic, Iterable, Optional, TypeVar
import threading

from service_locator.exceptions import CircularDependencyError, MissingArgumentError

T = TypeVar('T')

FactoryFunc = Callable[[Any, Dict[str, Any]], Any]


class Lifetime(Enum):
    """서비스 생명주기 타입"""
    INSTANCE = "instance"   # 등록 시점의 값을 그대로 반환
    FACTORY = "factory"     # 요청할 때마다 새 인스턴스 생성
    LAZY = "lazy"           # 최초 요청 시 한 번만 생성


class LazyState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"


class Lazy(Generic[T]):
    """
    Deferred value built by a zero-argument constructor.

    The constructor runs at most once, even when several threads race for
    the first access. If it raises, the handle stays uninitialized and the
    next access tries again. A constructor that reads its own handle gets
    CircularDependencyError instead of waiting on itself.
    """

    def __init__(self, factory: Callable[[], T]):
        if not callable(factory):
            raise TypeError(f"Lazy factory must be callable, got {type(factory).__name__}")
        self._v_factory = factory
        self._v_value: Optional[T] = None
        self._v_state = LazyState.UNINITIALIZED
        self._v_lock = threading.Lock()
        # ident of the thread currently running the constructor
        self._v_owner: Optional[int] = None

    @property
    def state(self) -> LazyState:
        return self._v_state

    @property
    def is_initialized(self) -> bool:
        return self._v_state is LazyState.INITIALIZED

    @property
    def value(self) -> T:
        if self._v_state is LazyState.UNINITIALIZED:
            if self._v_owner == threading.get_ident():
                raise CircularDependencyError(
                    "Lazy value was requested again by its own constructor"
                )
            with self._v_lock:
                if self._v_state is LazyState.UNINITIALIZED:
                    self._v_owner = threading.get_ident()
                    try:
                        self._v_value = self._v_factory()
                    finally:
                        self._v_owner = None
                    self._v_state = LazyState.INITIALIZED
                    # release the constructor's closure
                    self._v_factory = None
        return self._v_value

    def __repr__(self) -> str:
        return f"Lazy(state={self._v_state.value})"


class ServiceLifetime(ABC):
    """서비스 생명주기 기본 클래스"""

    def __init__(self, service_type: Any):
        self.service_type = service_type

    @abstractmethod
    def get_instance(self, locator: Any, named_args: Dict[str, Any]) -> Any:
        """인스턴스 반환"""

    @abstractmethod
    def get_lifetime_type(self) -> Lifetime:
        """생명주기 타입 반환"""


class InstanceLifetime(ServiceLifetime):
    """고정 인스턴스 생명주기"""

    def __init__(self, service_type: Any, instance: Any):
        super().__init__(service_type)
        self._v_instance = instance

    def get_instance(self, locator: Any, named_args: Dict[str, Any]) -> Any:
        return self._v_instance

    def get_lifetime_type(self) -> Lifetime:
        return Lifetime.INSTANCE


class FactoryLifetime(ServiceLifetime):
    """
    Transient lifetime backed by a factory function.

    ``required_args`` names the keys the factory needs in ``named_args``;
    they are checked before the factory is called.
    """

    def __init__(self, service_type: Any, factory: FactoryFunc, required_args: Optional[Iterable[str]] = None):
        super().__init__(service_type)
        if not callable(factory):
            raise TypeError(f"Factory must be callable, got {type(factory).__name__}")
        self._v_factory = factory
        self.required_args: FrozenSet[str] = frozenset(required_args or ())

    def get_instance(self, locator: Any, named_args: Dict[str, Any]) -> Any:
        _v_missing = sorted(self.required_args.difference(named_args))
        if _v_missing:
            raise MissingArgumentError(
                f"Factory for '{getattr(self.service_type, '__qualname__', self.service_type)}' "
                f"requires named argument(s): {', '.join(_v_missing)}",
                service_type=self.service_type,
                missing=_v_missing,
            )
        return self._v_factory(locator, named_args)

    def get_lifetime_type(self) -> Lifetime:
        return Lifetime.FACTORY


class LazyLifetime(ServiceLifetime):
    """지연 싱글톤 생명주기"""

    def __init__(self, service_type: Any, lazy: Lazy):
        super().__init__(service_type)
        self.lazy = lazy

    def get_instance(self, locator: Any, named_args: Dict[str, Any]) -> Any:
        # named_args are ignored; the constructor takes none
        try:
            return self.lazy.value
        except CircularDependencyError as e:
            if e.service_type is None:
                e.service_type = self.service_type
                e.context.setdefault(
                    "service_type", getattr(self.service_type, '__qualname__', str(self.service_type))
                )
            raise

    def get_lifetime_type(self) -> Lifetime:
        return Lifetime.LAZY


def create_lifetime(service_type: Any, lifetime_type: Lifetime, payload: Any, **options) -> ServiceLifetime:
    """생명주기 생성 팩토리 함수"""
    if lifetime_type == Lifetime.INSTANCE:
        return InstanceLifetime(service_type, payload)
    elif lifetime_type == Lifetime.FACTORY:
        return FactoryLifetime(service_type, payload, options.get('required_args'))
    elif lifetime_type == Lifetime.LAZY:
        if not isinstance(payload, Lazy):
            payload = Lazy(payload)
        return LazyLifetime(service_type, payload)
    else:
        raise ValueError(f"Unsupported lifetime type: {lifetime_type}")

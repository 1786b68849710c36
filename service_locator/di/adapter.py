"""
Service locator adapter contract

An adapter stores registrations and executes matching on behalf of the
ServiceLocator. Adapters never raise for registry outcomes; they return the
result variants from ``service_locator.di.results`` and leave error policy
to the locator.

The one exception allowed through is ``MissingArgumentError``: a factory
resolved without its required named arguments is a caller error that must
always propagate.

Adapters used from several threads must guarantee that a Lazy registration
is constructed at most once when first resolutions race.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, FrozenSet, Iterable, Optional

from .lifetime import FactoryFunc, Lazy
from .results import ClearResult, RegistrationResult, RemovalResult, ResolutionResult


class ServiceLocatorAdapter(ABC):
    """Storage and matching backend for a ServiceLocator"""

    @abstractmethod
    def register_instance(
        self,
        service_type: Any,
        instance: Any,
        *,
        interfaces: Optional[FrozenSet[Any]],
        name: Optional[str],
        key: Any,
        environment: Optional[str],
        allow_multiple_instances: bool,
    ) -> RegistrationResult:
        """Register a fixed instance of ``service_type``."""

    @abstractmethod
    def register_factory(
        self,
        service_type: Any,
        factory: FactoryFunc,
        *,
        interfaces: Optional[FrozenSet[Any]],
        name: Optional[str],
        key: Any,
        environment: Optional[str],
        allow_multiple_instances: bool,
        required_args: Optional[Iterable[str]] = None,
    ) -> RegistrationResult:
        """Register a factory called as ``factory(locator, named_args)`` per resolution."""

    @abstractmethod
    def register_lazy(
        self,
        service_type: Any,
        lazy: Lazy,
        *,
        interfaces: Optional[FrozenSet[Any]],
        name: Optional[str],
        key: Any,
        environment: Optional[str],
        allow_multiple_instances: bool,
        eager: bool = False,
    ) -> RegistrationResult:
        """
        Register a lazily constructed singleton.

        With ``eager`` the value is constructed right after it is stored; a
        failing constructor leaves no registration behind.
        """

    @abstractmethod
    def resolve(
        self,
        service_type: Any,
        *,
        locator: Any,
        name: Optional[str],
        key: Any,
        environment: Optional[str],
        named_args: Dict[str, Any],
        resolve_first: bool,
    ) -> ResolutionResult:
        """Resolve the earliest (``resolve_first``) or latest match."""

    @abstractmethod
    def resolve_all(
        self,
        service_type: Any,
        *,
        locator: Any,
        name: Optional[str],
        key: Any,
        environment: Optional[str],
        named_args: Dict[str, Any],
    ) -> ResolutionResult:
        """Resolve every match in insertion order; NotFound when there are none."""

    @abstractmethod
    def override_instance(
        self,
        service_type: Any,
        instance: Any,
        *,
        name: Optional[str],
        key: Any,
        environment: Optional[str],
    ) -> RemovalResult:
        """Replace the payload of every match with ``instance``."""

    @abstractmethod
    def override_factory(
        self,
        service_type: Any,
        factory: FactoryFunc,
        *,
        name: Optional[str],
        key: Any,
        environment: Optional[str],
        required_args: Optional[Iterable[str]] = None,
    ) -> RemovalResult:
        """Replace the payload of every match with ``factory``."""

    @abstractmethod
    def unregister(
        self,
        service_type: Any,
        *,
        name: Optional[str],
        key: Any,
        environment: Optional[str],
    ) -> RemovalResult:
        """Remove every match."""

    @abstractmethod
    def unregister_all(self) -> ClearResult:
        """Remove every registration."""

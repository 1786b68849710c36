"""
Registry key model

A RegistryKey is the composite identity (service type, name, key,
environment) of a registration. Optional parts match only when both sides
omit them or both supply equal values; there is no wildcarding.
"""

from dataclasses import dataclass
from typing import Any, FrozenSet, Optional


@dataclass(frozen=True)
class RegistryKey:
    """서비스 등록 키"""
    service_type: Any
    name: Optional[str] = None
    key: Any = None
    environment: Optional[str] = None

    def matches(self, other: 'RegistryKey') -> bool:
        """Exact match used for conflict detection."""
        return (
            self.service_type is other.service_type
            and self.matches_qualifiers(other.name, other.key, other.environment)
        )

    def matches_qualifiers(self, name: Optional[str], key: Any, environment: Optional[str]) -> bool:
        """Match name, key and environment, ignoring the service type."""
        return (
            _optional_equal(self.name, name)
            and _optional_equal(self.key, key)
            and _optional_equal(self.environment, environment)
        )

    def matches_filter(
        self,
        service_type: Any,
        interfaces: FrozenSet[Any],
        name: Optional[str],
        key: Any,
        environment: Optional[str],
    ) -> bool:
        """
        Resolution-time match.

        ``service_type`` is the requested type; it matches when it is this
        key's declared type or one of the explicitly declared ``interfaces``
        of the registration.
        """
        if service_type is not self.service_type and service_type not in interfaces:
            return False
        return self.matches_qualifiers(name, key, environment)

    def describe(self) -> str:
        parts = [getattr(self.service_type, '__qualname__', str(self.service_type))]
        if self.name is not None:
            parts.append(f"name={self.name!r}")
        if self.key is not None:
            parts.append(f"key={self.key!r}")
        if self.environment is not None:
            parts.append(f"environment={self.environment!r}")
        return ", ".join(parts)


def _optional_equal(left: Any, right: Any) -> bool:
    if left is None or right is None:
        return left is None and right is None
    return left == right

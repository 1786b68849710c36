"""User-facing locator messages."""

from typing import Any


def type_name(service_type: Any) -> str:
    return getattr(service_type, '__qualname__', None) or str(service_type)


def registration_already_exists(service_type: Any) -> str:
    return f"A registration already exists for type '{type_name(service_type)}'."


def no_registration_found(service_type: Any) -> str:
    return f"No registration found for type '{type_name(service_type)}'."


def internal_error_occurred(detail: str) -> str:
    return f"An internal error occurred in the service locator adapter: {detail}"

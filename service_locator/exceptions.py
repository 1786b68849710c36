"""
Service locator exception hierarchy

All errors raised by the locator derive from LocatorException. Conflict and
not-found errors are only raised when the locator is configured with
``throw_on_error=True``; internal and argument errors are always raised.
"""

import traceback
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any, Type


class ErrorSeverity(Enum):
    """에러 심각도"""
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ErrorCategory(Enum):
    """에러 카테고리"""
    REGISTRATION = "REGISTRATION"
    RESOLUTION = "RESOLUTION"
    ADAPTER = "ADAPTER"
    ARGUMENT = "ARGUMENT"
    STATE = "STATE"
    CONFIG = "CONFIG"
    UNKNOWN = "UNKNOWN"


def _type_name(service_type: Any) -> str:
    return getattr(service_type, '__qualname__', None) or str(service_type)


class LocatorException(Exception):
    """
    Base class for every service locator error.

    Attributes:
        error_code: error identifier (e.g. "RESOLUTION_NOT_FOUND")
        context: registry filter and other details of the failed call
        severity: error severity
        category: error category
        timestamp: when the error was created
        original_error: wrapped exception, if any
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category  # category must be set before _generate_error_code()
        self.severity = severity
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.timestamp = datetime.now()
        self.original_error = original_error
        self._traceback = (
            ''.join(traceback.format_exception(
                type(original_error), original_error, original_error.__traceback__
            ))
            if original_error is not None else None
        )

    def _generate_error_code(self) -> str:
        return f"{self.category.value}_{self.__class__.__name__.upper()}"

    def to_dict(self) -> Dict[str, Any]:
        """에러 정보를 딕셔너리로 변환"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_error) if self.original_error else None,
            "traceback": self._traceback,
        }

    def with_context(self, **kwargs) -> "LocatorException":
        """추가 컨텍스트 정보 추가"""
        self.context.update(kwargs)
        return self

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            parts.append(f" (context: {context_str})")
        return "".join(parts)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"severity={self.severity.value})"
        )


# ============================================================================
# Registry outcomes
# ============================================================================

class RegistrationConflictError(LocatorException):
    """A registration with the same RegistryKey already exists"""

    def __init__(self, message: str, service_type: Any = None, **kwargs):
        super().__init__(
            message,
            error_code="REGISTRATION_CONFLICT",
            category=ErrorCategory.REGISTRATION,
            **kwargs
        )
        self.service_type = service_type
        if service_type is not None:
            self.context.setdefault("service_type", _type_name(service_type))


class ServiceNotFoundError(LocatorException):
    """No registration matches the requested type and filter"""

    def __init__(self, message: str, service_type: Any = None, **kwargs):
        super().__init__(
            message,
            error_code="RESOLUTION_NOT_FOUND",
            category=ErrorCategory.RESOLUTION,
            **kwargs
        )
        self.service_type = service_type
        if service_type is not None:
            self.context.setdefault("service_type", _type_name(service_type))


class LocatorInternalError(LocatorException):
    """The adapter failed internally; never downgraded to a warning"""

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("severity", ErrorSeverity.CRITICAL)
        super().__init__(
            message,
            error_code="ADAPTER_INTERNAL_ERROR",
            category=ErrorCategory.ADAPTER,
            **kwargs
        )


class MissingArgumentError(LocatorException, TypeError):
    """A factory was resolved without one of its required named arguments"""

    def __init__(self, message: str, service_type: Any = None, missing: Optional[list] = None, **kwargs):
        super().__init__(
            message,
            error_code="ARGUMENT_MISSING",
            category=ErrorCategory.ARGUMENT,
            **kwargs
        )
        self.service_type = service_type
        self.missing = list(missing or [])
        if self.missing:
            self.context["missing"] = self.missing


class CircularDependencyError(LocatorException):
    """A lazy constructor asked, on its own thread, for the value it is building"""

    def __init__(self, message: str, service_type: Any = None, **kwargs):
        super().__init__(
            message,
            error_code="RESOLUTION_CIRCULAR_DEPENDENCY",
            category=ErrorCategory.RESOLUTION,
            **kwargs
        )
        self.service_type = service_type
        if service_type is not None:
            self.context.setdefault("service_type", _type_name(service_type))


# ============================================================================
# Locator lifecycle
# ============================================================================

class LocatorStateError(LocatorException):
    """전역 로케이터 상태 관련 기본 예외"""

    def __init__(self, message: str, error_code: Optional[str] = None, **kwargs):
        super().__init__(
            message,
            error_code=error_code or "STATE_ERROR",
            category=ErrorCategory.STATE,
            **kwargs
        )


class LocatorAlreadyInitializedError(LocatorStateError):

    def __init__(self, message: str = "ServiceLocator has already been initialized and cannot be configured again.", **kwargs):
        super().__init__(message, error_code="STATE_ALREADY_INITIALIZED", **kwargs)


class LocatorNotInitializedError(LocatorStateError):

    def __init__(self, message: str = "ServiceLocator must be initialized using the ServiceLocatorBuilder before accessing the instance.", **kwargs):
        super().__init__(message, error_code="STATE_NOT_INITIALIZED", **kwargs)


class AdapterNotConfiguredError(LocatorStateError):

    def __init__(self, message: str = "A ServiceLocatorAdapter must be provided before building the ServiceLocator.", **kwargs):
        super().__init__(message, error_code="STATE_ADAPTER_MISSING", **kwargs)


# ============================================================================
# Configuration
# ============================================================================

class ConfigValidationError(LocatorException):
    """설정값 유효성 검증 실패"""

    def __init__(self, message: str, config_key: Optional[str] = None, value: Any = None, **kwargs):
        super().__init__(
            message,
            error_code="CONFIG_VALIDATION_ERROR",
            category=ErrorCategory.CONFIG,
            **kwargs
        )
        if config_key:
            self.context["config_key"] = config_key
        if value is not None:
            self.context["value"] = value


# ============================================================================
# 유틸리티 함수
# ============================================================================

def wrap_exception(
    original: BaseException,
    exception_class: Type[LocatorException] = LocatorException,
    message: Optional[str] = None,
    **kwargs
) -> LocatorException:
    """
    Wrap an arbitrary exception in a LocatorException subclass.

    Args:
        original: exception to wrap
        exception_class: LocatorException subclass to construct
        message: message override (defaults to ``str(original)``)
        **kwargs: forwarded to the exception constructor

    Returns:
        LocatorException: the wrapping exception
    """
    msg = message or str(original)
    return exception_class(
        message=msg,
        original_error=original,
        **kwargs
    )


def get_error_code(error: BaseException) -> Optional[str]:
    """예외에서 에러 코드 추출"""
    if isinstance(error, LocatorException):
        return error.error_code
    return None


def get_error_context(error: BaseException) -> Dict[str, Any]:
    """예외에서 컨텍스트 추출"""
    if isinstance(error, LocatorException):
        return error.context
    return {}


def is_critical(error: BaseException) -> bool:
    """치명적 에러인지 확인"""
    if isinstance(error, LocatorException):
        return error.severity == ErrorSeverity.CRITICAL
    return False

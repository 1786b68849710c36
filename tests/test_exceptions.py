"""
로케이터 예외 체계 테스트
"""

import pytest
from datetime import datetime

from service_locator.exceptions import (
    # Base
    LocatorException,
    ErrorSeverity,
    ErrorCategory,
    # Registry outcomes
    RegistrationConflictError,
    ServiceNotFoundError,
    LocatorInternalError,
    MissingArgumentError,
    # State
    LocatorStateError,
    LocatorAlreadyInitializedError,
    LocatorNotInitializedError,
    AdapterNotConfiguredError,
    # Config
    ConfigValidationError,
    # Utilities
    wrap_exception,
    get_error_code,
    get_error_context,
    is_critical,
)


class Database:
    pass


class TestLocatorException:
    """LocatorException 기본 테스트"""

    def test_basic_exception(self):
        exc = LocatorException("테스트 에러")
        assert exc.message == "테스트 에러"
        assert exc.error_code == "UNKNOWN_LOCATOREXCEPTION"
        assert isinstance(exc.timestamp, datetime)
        assert exc.severity is ErrorSeverity.ERROR

    def test_with_context(self):
        exc = LocatorException("테스트").with_context(service_type="Database")
        assert exc.context == {"service_type": "Database"}
        assert "service_type=Database" in str(exc)

    def test_original_error_traceback(self):
        try:
            raise ValueError("원본 에러")
        except ValueError as e:
            exc = LocatorException("래핑된 에러", original_error=e)

        data = exc.to_dict()
        assert data["original_error"] == "원본 에러"
        assert "ValueError" in data["traceback"]

    def test_to_dict(self):
        exc = LocatorException("테스트", error_code="TEST_001", category=ErrorCategory.STATE)
        data = exc.to_dict()
        assert data["error_code"] == "TEST_001"
        assert data["category"] == "STATE"
        assert data["severity"] == "ERROR"
        assert data["traceback"] is None

    def test_repr(self):
        assert "error_code='TEST_001'" in repr(LocatorException("x", error_code="TEST_001"))


class TestRegistryExceptions:

    def test_conflict(self):
        exc = RegistrationConflictError("duplicate", service_type=Database)
        assert exc.error_code == "REGISTRATION_CONFLICT"
        assert exc.category is ErrorCategory.REGISTRATION
        assert exc.service_type is Database
        assert exc.context["service_type"] == "Database"

    def test_not_found_keeps_given_context(self):
        exc = ServiceNotFoundError("missing", service_type=Database, context={"service_type": "db", "name": "x"})
        assert exc.context == {"service_type": "db", "name": "x"}
        assert exc.error_code == "RESOLUTION_NOT_FOUND"

    def test_internal_error_is_critical(self):
        exc = LocatorInternalError("corrupted")
        assert exc.severity is ErrorSeverity.CRITICAL
        assert is_critical(exc)
        assert not is_critical(ServiceNotFoundError("missing"))
        assert not is_critical(ValueError("plain"))

    def test_missing_argument_is_type_error(self):
        exc = MissingArgumentError("need host", service_type=Database, missing=["host"])
        assert isinstance(exc, TypeError)
        assert isinstance(exc, LocatorException)
        assert exc.context["missing"] == ["host"]

        with pytest.raises(TypeError):
            raise exc


class TestStateExceptions:

    @pytest.mark.parametrize("exc_class,code", [
        (LocatorAlreadyInitializedError, "STATE_ALREADY_INITIALIZED"),
        (LocatorNotInitializedError, "STATE_NOT_INITIALIZED"),
        (AdapterNotConfiguredError, "STATE_ADAPTER_MISSING"),
    ])
    def test_codes_and_default_messages(self, exc_class, code):
        exc = exc_class()
        assert isinstance(exc, LocatorStateError)
        assert exc.error_code == code
        assert "ServiceLocator" in exc.message

    def test_config_validation_error(self):
        exc = ConfigValidationError("bad", config_key="LOCATOR_THROW_ON_ERROR", value="maybe")
        assert exc.category is ErrorCategory.CONFIG
        assert exc.context == {"config_key": "LOCATOR_THROW_ON_ERROR", "value": "maybe"}


class TestUtilities:

    def test_wrap_exception(self):
        original = RuntimeError("disk full")
        wrapped = wrap_exception(original, LocatorInternalError)

        assert isinstance(wrapped, LocatorInternalError)
        assert wrapped.original_error is original
        assert wrapped.message == "disk full"

    def test_wrap_exception_with_message(self):
        wrapped = wrap_exception(KeyError("k"), message="lookup failed")
        assert type(wrapped) is LocatorException
        assert wrapped.message == "lookup failed"

    def test_get_error_code_and_context(self):
        exc = ServiceNotFoundError("missing", service_type=Database)
        assert get_error_code(exc) == "RESOLUTION_NOT_FOUND"
        assert get_error_context(exc) == {"service_type": "Database"}
        assert get_error_code(ValueError()) is None
        assert get_error_context(ValueError()) == {}

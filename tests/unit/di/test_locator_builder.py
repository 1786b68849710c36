"""
ServiceLocatorBuilder / 전역 로케이터 테스트
"""

import threading

import pytest

from service_locator.config import LocatorConfig
from service_locator.di import (
    InMemoryAdapter,
    ServiceLocator,
    ServiceLocatorBuilder,
    get_locator,
    is_initialized,
    reset_locator,
)
from service_locator.exceptions import (
    AdapterNotConfiguredError,
    LocatorAlreadyInitializedError,
    LocatorNotInitializedError,
    LocatorStateError,
)


class TestBuilder:

    def test_build_publishes_locator(self):
        adapter = InMemoryAdapter()
        config = LocatorConfig(throw_on_error=True)

        locator = ServiceLocatorBuilder().with_adapter(adapter).with_config(config).build()

        assert isinstance(locator, ServiceLocator)
        assert get_locator() is locator
        assert locator.adapter is adapter
        assert locator.config is config
        assert is_initialized()

    def test_default_config(self):
        locator = ServiceLocatorBuilder().with_adapter(InMemoryAdapter()).build()
        assert locator.config == LocatorConfig()
        assert locator.config.throw_on_error is False
        assert locator.config.allow_multiple_instances is True

    def test_second_build_fails(self):
        first = ServiceLocatorBuilder().with_adapter(InMemoryAdapter()).build()

        with pytest.raises(LocatorAlreadyInitializedError):
            ServiceLocatorBuilder().with_adapter(InMemoryAdapter()).build()

        assert get_locator() is first

    def test_build_without_adapter_fails(self):
        with pytest.raises(AdapterNotConfiguredError):
            ServiceLocatorBuilder().with_config(LocatorConfig()).build()
        assert not is_initialized()

    def test_access_before_build_fails(self):
        with pytest.raises(LocatorNotInitializedError) as exc_info:
            get_locator()
        assert isinstance(exc_info.value, LocatorStateError)

    def test_reset_allows_rebuild(self):
        ServiceLocatorBuilder().with_adapter(InMemoryAdapter()).build()
        reset_locator()

        assert not is_initialized()
        second = ServiceLocatorBuilder().with_adapter(InMemoryAdapter()).build()
        assert get_locator() is second

    def test_unregister_all_keeps_binding(self):
        locator = ServiceLocatorBuilder().with_adapter(InMemoryAdapter()).build()
        locator.register_instance(str, "value")

        locator.unregister_all()

        assert get_locator() is locator

    def test_concurrent_builds_publish_once(self):
        """동시에 build() 호출 시 하나만 성공"""
        gate = threading.Barrier(6)
        built, failed = [], []

        def worker():
            gate.wait()
            try:
                built.append(ServiceLocatorBuilder().with_adapter(InMemoryAdapter()).build())
            except LocatorAlreadyInitializedError:
                failed.append(1)

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(built) == 1
        assert len(failed) == 5
        assert get_locator() is built[0]

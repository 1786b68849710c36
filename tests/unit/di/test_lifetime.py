"""
서비스 생명주기 테스트
"""

import threading

import pytest

from service_locator.di.lifetime import (
    FactoryLifetime,
    InstanceLifetime,
    Lazy,
    LazyLifetime,
    LazyState,
    Lifetime,
    create_lifetime,
)
from service_locator.exceptions import CircularDependencyError, MissingArgumentError


class Counter:
    created = 0

    def __init__(self):
        Counter.created += 1


class TestLazy:

    def test_starts_uninitialized(self):
        lazy = Lazy(object)
        assert lazy.state is LazyState.UNINITIALIZED
        assert not lazy.is_initialized

    def test_constructs_once(self):
        calls = []

        def build():
            calls.append(1)
            return object()

        lazy = Lazy(build)
        first = lazy.value
        second = lazy.value

        assert first is second
        assert len(calls) == 1
        assert lazy.state is LazyState.INITIALIZED

    def test_failed_constructor_can_retry(self):
        attempts = []

        def build():
            attempts.append(1)
            if len(attempts) == 1:
                raise RuntimeError("boom")
            return "ok"

        lazy = Lazy(build)
        with pytest.raises(RuntimeError):
            lazy.value
        assert not lazy.is_initialized
        assert lazy.value == "ok"
        assert len(attempts) == 2

    def test_racing_first_access_constructs_once(self):
        """동시 최초 접근 시에도 생성자는 한 번만 실행"""
        calls = []
        gate = threading.Barrier(8)

        def build():
            calls.append(1)
            return object()

        lazy = Lazy(build)
        results = []

        def worker():
            gate.wait()
            results.append(lazy.value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_rejects_non_callable(self):
        with pytest.raises(TypeError):
            Lazy(42)

    def test_constructor_reading_own_value_raises(self):
        lazy = None

        def build():
            return lazy.value

        lazy = Lazy(build)
        with pytest.raises(CircularDependencyError):
            lazy.value

        assert not lazy.is_initialized

    def test_other_thread_not_blocked_after_self_reference(self):
        lazy = None

        def build():
            return lazy.value

        lazy = Lazy(build)
        outcome = {}

        def worker():
            try:
                lazy.value
            except CircularDependencyError as e:
                outcome["error"] = e

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join(2)

        assert not thread.is_alive()
        assert isinstance(outcome["error"], CircularDependencyError)


class TestLifetimes:

    def test_instance_returns_same_payload(self):
        payload = object()
        lifetime = InstanceLifetime(object, payload)
        assert lifetime.get_instance(None, {}) is payload
        assert lifetime.get_instance(None, {"x": 1}) is payload
        assert lifetime.get_lifetime_type() is Lifetime.INSTANCE

    def test_factory_builds_fresh_values(self):
        Counter.created = 0
        lifetime = FactoryLifetime(Counter, lambda locator, args: Counter())

        first = lifetime.get_instance(None, {})
        second = lifetime.get_instance(None, {})

        assert first is not second
        assert Counter.created == 2
        assert lifetime.get_lifetime_type() is Lifetime.FACTORY

    def test_factory_receives_locator_and_args(self):
        received = {}

        def factory(locator, named_args):
            received['locator'] = locator
            received['args'] = named_args
            return 1

        sentinel = object()
        FactoryLifetime(int, factory).get_instance(sentinel, {"port": 5432})

        assert received['locator'] is sentinel
        assert received['args'] == {"port": 5432}

    def test_factory_missing_required_args(self):
        called = []
        lifetime = FactoryLifetime(
            int, lambda locator, args: called.append(1), required_args=["host", "port"]
        )

        with pytest.raises(MissingArgumentError) as exc_info:
            lifetime.get_instance(None, {"host": "db"})

        assert exc_info.value.missing == ["port"]
        assert isinstance(exc_info.value, TypeError)
        assert called == []

    def test_lazy_ignores_named_args(self):
        lazy = Lazy(lambda: object())
        lifetime = LazyLifetime(object, lazy)

        first = lifetime.get_instance(None, {})
        second = lifetime.get_instance(None, {"anything": True})

        assert first is second
        assert lifetime.get_lifetime_type() is Lifetime.LAZY

    def test_create_lifetime_wraps_callable_in_lazy(self):
        lifetime = create_lifetime(object, Lifetime.LAZY, object)
        assert isinstance(lifetime, LazyLifetime)
        assert isinstance(lifetime.lazy, Lazy)

    def test_create_lifetime_passes_required_args(self):
        lifetime = create_lifetime(int, Lifetime.FACTORY, lambda l, a: 1, required_args=["x"])
        assert lifetime.required_args == frozenset({"x"})

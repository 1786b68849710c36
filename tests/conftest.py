"""
Pytest configuration file.
"""

import sys
import pytest
from pathlib import Path

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from service_locator.config import LocatorConfig  # noqa: E402
from service_locator.di import InMemoryAdapter, ServiceLocator, reset_locator  # noqa: E402


@pytest.fixture(autouse=True)
def clean_global_locator():
    """테스트마다 전역 로케이터 초기화"""
    reset_locator()
    yield
    reset_locator()


@pytest.fixture(autouse=True)
def clean_locator_env(monkeypatch):
    """LOCATOR_* 환경변수 제거"""
    for name in ('LOCATOR_THROW_ON_ERROR', 'LOCATOR_ALLOW_MULTIPLE_INSTANCES', 'LOCATOR_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def adapter():
    return InMemoryAdapter()


@pytest.fixture
def locator(adapter):
    """Lenient locator: warnings instead of exceptions, duplicates allowed"""
    return ServiceLocator(adapter, LocatorConfig())


@pytest.fixture
def strict_locator(adapter):
    """Throwing locator that rejects duplicate registrations"""
    return ServiceLocator(adapter, LocatorConfig(throw_on_error=True, allow_multiple_instances=False))

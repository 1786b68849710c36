"""
ServiceLocator 사용 예제
"""

import sys
from pathlib import Path

# 프로젝트 루트 경로를 sys.path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from service_locator import (  # noqa: E402
    InMemoryAdapter,
    LocatorConfig,
    ServiceLocatorBuilder,
    get_locator,
)
from service_locator.logging import setup_logging  # noqa: E402


class Repository:
    pass


class SqlRepository(Repository):
    def __init__(self, dsn: str):
        self.dsn = dsn


class ReportService:
    def __init__(self, repository: Repository, title: str):
        self.repository = repository
        self.title = title


def configure_services():
    """서비스 등록"""
    locator = get_locator()

    locator.register_instance(str, "sqlite:///reports.db", name="dsn")
    locator.register_lazy(
        SqlRepository,
        lambda: SqlRepository(get_locator().resolve(str, name="dsn")),
        interfaces=[Repository],
    )
    locator.register_factory(
        ReportService,
        lambda loc, args: ReportService(loc.resolve(Repository), args["title"]),
        required_args=["title"],
    )


def main():
    """ServiceLocator 사용 예제 메인 함수"""
    setup_logging(level='INFO')

    # 1. 전역 로케이터 생성 (LOCATOR_* 환경변수 반영)
    (
        ServiceLocatorBuilder()
        .with_adapter(InMemoryAdapter())
        .with_config(LocatorConfig.from_env())
        .build()
    )

    # 2. 서비스 등록
    configure_services()

    # 3. 서비스 해결
    locator = get_locator()
    daily = locator.resolve(ReportService, named_args={"title": "daily"})
    weekly = locator.resolve(ReportService, named_args={"title": "weekly"})

    print(f"{daily.title}: {daily.repository.dsn}")
    print(f"{weekly.title}: {weekly.repository.dsn}")
    print(f"shared repository: {daily.repository is weekly.repository}")

    # 4. 등록되지 않은 서비스 (throw_on_error=False 이면 경고 후 None)
    print(f"missing: {locator.resolve(int)}")


if __name__ == "__main__":
    main()

# tests/repositories/test_server_repository.py
import pytest
from sqlalchemy import inspect as sa_inspect

from src.database import models
from src.repositories.sqlalchemy import SqlalchemyServerRepository


@pytest.fixture
def server_repo(seeded) -> SqlalchemyServerRepository:
    return SqlalchemyServerRepository(seeded)


class TestServerViews:
    def test_list_all_views_includes_unlinked_hosts(self, server_repo):
        """필터가 없으면 플랫폼이 없는 호스트까지 ID순으로 모두 반환합니다."""
        views = server_repo.list_views()

        assert [v["host_id"] for v in views] == [10, 20, 30]
        spare = views[2]
        assert spare["bench_name"] is None
        assert spare["platform_id"] is None

    def test_list_views_filtered_by_platform(self, server_repo):
        """필터를 주면 해당 플랫폼의 호스트만 반환하고 플랫폼 없는 호스트는 제외합니다."""
        views = server_repo.list_views([7])

        assert views == [{
            "host_id": 10,
            "bench_name": "HIL-AD-01",
            "host_name": "pc-ad-01",
            "bench_type": "Fullsize",
            "info_text": "AD",
            "status": "online",
            "active_user": None,
            "platform_id": 7,
            "platform_name": "SCALEXIO",
        }]

    def test_find_view_missing(self, server_repo):
        assert server_repo.find_view(999) is None

    def test_find_platform_id_for_bench(self, server_repo):
        assert server_repo.find_platform_id_for_bench(2) == 9
        assert server_repo.find_platform_id_for_bench(None) is None


class TestBenchPlatformLink:
    def test_upsert_moves_bench_to_other_platform(self, server_repo, seeded):
        """같은 벤치에 다시 upsert하면 행을 추가하지 않고 플랫폼만 바뀝니다."""
        server_repo.upsert_bench_platform(1, 9)
        server_repo.upsert_bench_platform(1, 9)
        seeded.commit()

        links = seeded.query(models.BenchPlatformLink).filter_by(bench_id=1).all()
        assert len(links) == 1
        assert links[0].platform_id == 9

    def test_delete_link(self, server_repo, seeded):
        server_repo.delete_bench_platform(1)
        seeded.commit()

        assert server_repo.find_platform_id_for_bench(1) is None
        assert server_repo.find_view(10)["platform_id"] is None

    def test_delete_host_keeps_bench_and_link(self, server_repo, seeded):
        server_repo.delete_host(server_repo.find_host(10))
        seeded.commit()

        assert server_repo.find_host(10) is None
        assert server_repo.find_bench(1) is not None
        assert server_repo.find_platform_id_for_bench(1) == 7


def test_bench_and_host_columns_match_read_shape():
    """벤치와 호스트는 서버 조회 형태와 상태 계산에 쓰이는 컬럼만 가집니다."""
    assert [c.name for c in models.Bench.__table__.columns] == ["id", "name", "bench_type"]
    assert [c.name for c in models.Host.__table__.columns] == [
        "id", "bench_id", "name", "info_text", "status", "active_user", "created_at",
    ]
    assert not sa_inspect(models.Host).relationships

# tests/repositories/test_platform_repository.py
import pytest

from src.repositories.sqlalchemy import SqlalchemyPlatformRepository


@pytest.fixture
def platform_repo(seeded) -> SqlalchemyPlatformRepository:
    return SqlalchemyPlatformRepository(seeded)


def test_locking_read_returns_platform(platform_repo):
    """잠금 읽기는 FOR UPDATE를 지원하지 않는 SQLite에서도 같은 행을 반환합니다."""
    assert platform_repo.find_by_name("PHS", for_update=True).id == 9
    assert platform_repo.find_by_name("Zeta", for_update=True) is None


def test_insert_if_absent_reports_only_new_rows(platform_repo, seeded):
    assert platform_repo.insert_if_absent("Zeta") is True
    assert platform_repo.insert_if_absent("Zeta") is False
    assert platform_repo.insert_if_absent("SCALEXIO") is False
    seeded.commit()

    assert [p.name for p in platform_repo.list_all()] == ["PHS", "SCALEXIO", "Zeta"]


def test_find_existing_ids(platform_repo):
    assert platform_repo.find_existing_ids([7, 9, 99]) == {7, 9}
    assert platform_repo.find_existing_ids([]) == set()

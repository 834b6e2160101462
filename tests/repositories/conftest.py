# tests/repositories/conftest.py
import pytest

from src.database.database import Base, build_engine, build_session_factory
from src.database import models


@pytest.fixture
def engine(tmp_path):
    """테스트마다 새로운 SQLite 파일 DB를 만듭니다. (여러 세션/스레드가 같은 DB를 보도록 파일 사용)"""
    engine = build_engine(f"sqlite:///{tmp_path / 'bench.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()

@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)

@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()

@pytest.fixture
def seeded(db_session):
    """플랫폼 7(SCALEXIO)과 9(PHS), 각 플랫폼의 벤치/호스트 하나, 플랫폼 없는 호스트 하나."""
    db_session.add_all([
        models.Platform(id=7, name="SCALEXIO"),
        models.Platform(id=9, name="PHS"),
        models.Bench(id=1, name="HIL-AD-01", bench_type="Fullsize"),
        models.Bench(id=2, name="HIL-PT-02", bench_type="Midsize"),
    ])
    db_session.flush()
    db_session.add_all([
        models.BenchPlatformLink(bench_id=1, platform_id=7),
        models.BenchPlatformLink(bench_id=2, platform_id=9),
        models.Host(id=10, bench_id=1, name="pc-ad-01", info_text="AD", status="online"),
        models.Host(id=20, bench_id=2, name="pc-pt-02", info_text="PT", status="in_use", active_user="bob"),
        models.Host(id=30, bench_id=None, name="pc-spare", info_text="spare", status="online"),
        models.Software(id=1, name="ControlDesk", major_version="7", vendor="dSPACE"),
        models.VM(id=5, name="vm-build"),
    ])
    db_session.flush()
    db_session.add(models.License(id=100, software_id=1, name="CD-floating-1", license_type="floating"))
    db_session.commit()
    return db_session

from typing import List, Optional, Dict, Any, Collection
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import IServerRepository
from src.repositories.sqlalchemy.dialect_insert import upsert

class SqlalchemyServerRepository(IServerRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_host(self, host_id: int) -> Optional[models.Host]:
        return self.db.query(models.Host).filter(models.Host.id == host_id).first()

    def find_bench(self, bench_id: int) -> Optional[models.Bench]:
        return self.db.query(models.Bench).filter(models.Bench.id == bench_id).first()

    def find_platform_id_for_bench(self, bench_id: Optional[int]) -> Optional[int]:
        if bench_id is None:
            return None
        row = self.db.query(models.BenchPlatformLink.platform_id).filter(
            models.BenchPlatformLink.bench_id == bench_id
        ).first()
        return row[0] if row else None

    def create_bench(self, bench_model: models.Bench) -> models.Bench:
        self.db.add(bench_model)
        self.db.flush()
        return bench_model

    def create_host(self, host_model: models.Host) -> models.Host:
        self.db.add(host_model)
        self.db.flush()
        return host_model

    def save_host(self, host: models.Host) -> models.Host:
        self.db.add(host)
        self.db.flush()
        return host

    def save_bench(self, bench: models.Bench) -> models.Bench:
        self.db.add(bench)
        self.db.flush()
        return bench

    def upsert_bench_platform(self, bench_id: int, platform_id: int):
        upsert(
            self.db,
            models.BenchPlatformLink,
            {"bench_id": bench_id, "platform_id": platform_id},
            index_elements=["bench_id"],
            update_columns=["platform_id"],
        )

    def delete_bench_platform(self, bench_id: int):
        self.db.query(models.BenchPlatformLink).filter(
            models.BenchPlatformLink.bench_id == bench_id
        ).delete()

    def delete_host(self, host: models.Host):
        self.db.delete(host)
        self.db.flush()

    def _view_query(self):
        return (
            self.db.query(
                models.Host.id.label("host_id"),
                models.Bench.name.label("bench_name"),
                models.Host.name.label("host_name"),
                models.Bench.bench_type,
                models.Host.info_text,
                models.Host.status,
                models.Host.active_user,
                models.BenchPlatformLink.platform_id,
                models.Platform.name.label("platform_name"),
            )
            .select_from(models.Host)
            .outerjoin(models.Bench, models.Host.bench_id == models.Bench.id)
            .outerjoin(models.BenchPlatformLink, models.BenchPlatformLink.bench_id == models.Bench.id)
            .outerjoin(models.Platform, models.Platform.id == models.BenchPlatformLink.platform_id)
        )

    def find_view(self, host_id: int) -> Optional[Dict[str, Any]]:
        row = self._view_query().filter(models.Host.id == host_id).first()
        return row._asdict() if row else None

    def list_views(self, platform_ids: Optional[Collection[int]] = None) -> List[Dict[str, Any]]:
        query = self._view_query()
        if platform_ids is not None:
            query = query.filter(models.BenchPlatformLink.platform_id.in_(list(platform_ids)))
        return [row._asdict() for row in query.order_by(models.Host.id.asc()).all()]

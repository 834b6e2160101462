from typing import List, Optional, Iterable, Set
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import IPlatformRepository
from src.repositories.sqlalchemy.dialect_insert import insert_ignore

class SqlalchemyPlatformRepository(IPlatformRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_name(self, name: str, for_update: bool = False) -> Optional[models.Platform]:
        query = self.db.query(models.Platform).filter(models.Platform.name == name)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def insert_if_absent(self, name: str) -> bool:
        return insert_ignore(self.db, models.Platform, {"name": name}, index_elements=["name"])

    def list_all(self) -> List[models.Platform]:
        return self.db.query(models.Platform).order_by(models.Platform.name.asc()).all()

    def find_existing_ids(self, platform_ids: Iterable[int]) -> Set[int]:
        ids = set(platform_ids)
        if not ids:
            return set()
        rows = self.db.query(models.Platform.id).filter(models.Platform.id.in_(ids)).all()
        return {row[0] for row in rows}

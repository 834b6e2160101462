from typing import List, Optional
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import IPermissionRepository

class SqlalchemyPermissionRepository(IPermissionRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_name(self, name: str) -> Optional[models.Permission]:
        return self.db.query(models.Permission).filter(models.Permission.name == name).first()

    def list_all(self) -> List[models.Permission]:
        return self.db.query(models.Permission).order_by(models.Permission.id.asc()).all()

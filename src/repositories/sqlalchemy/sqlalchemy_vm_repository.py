from typing import Optional
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import IVMRepository

class SqlalchemyVMRepository(IVMRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_id(self, vm_id: int) -> Optional[models.VM]:
        return self.db.query(models.VM).filter(models.VM.id == vm_id).first()

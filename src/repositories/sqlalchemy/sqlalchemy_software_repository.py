from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import ISoftwareRepository
from src.repositories.sqlalchemy.dialect_insert import insert_ignore

# 할당 대상 종류 -> (연관 모델, 대상 ID 컬럼 이름)
_TARGETS = {
    "host": (models.HostSoftware, "host_id"),
    "vm": (models.VmSoftware, "vm_id"),
}

class SqlalchemySoftwareRepository(ISoftwareRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_id(self, software_id: int) -> Optional[models.Software]:
        return self.db.query(models.Software).filter(models.Software.id == software_id).first()

    def insert_assignment_if_absent(self, target: str, target_id: int, software_id: int, install_date: Optional[str]) -> bool:
        model, column = _TARGETS[target]
        return insert_ignore(
            self.db,
            model,
            {column: target_id, "software_id": software_id, "install_date": install_date},
            index_elements=[column, "software_id"],
        )

    def delete_assignment(self, target: str, target_id: int, software_id: int) -> int:
        model, column = _TARGETS[target]
        return self.db.query(model).filter(
            getattr(model, column) == target_id,
            model.software_id == software_id,
        ).delete(synchronize_session=False)

    def list_assignments(self, target: str, target_id: int) -> List[Dict[str, Any]]:
        model, column = _TARGETS[target]
        rows = (
            self.db.query(
                model.software_id,
                model.install_date,
                models.Software.name.label("software_name"),
                models.Software.major_version,
                models.Software.vendor,
            )
            .join(models.Software, models.Software.id == model.software_id)
            .filter(getattr(model, column) == target_id)
            .order_by(model.software_id.asc())
            .all()
        )
        return [row._asdict() for row in rows]

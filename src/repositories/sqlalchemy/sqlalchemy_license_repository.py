from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import ILicenseRepository

class SqlalchemyLicenseRepository(ILicenseRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_id(self, license_id: int) -> Optional[models.License]:
        return self.db.query(models.License).filter(models.License.id == license_id).first()

    def find_assignment(self, license_id: int) -> Optional[models.LicenseAssignment]:
        return self.db.query(models.LicenseAssignment).filter(
            models.LicenseAssignment.license_id == license_id
        ).first()

    def delete_assignments(self, license_id: int) -> int:
        deleted = self.db.query(models.LicenseAssignment).filter(
            models.LicenseAssignment.license_id == license_id
        ).delete()
        self.db.flush()
        return deleted

    def create_assignment(self, assignment_model: models.LicenseAssignment) -> models.LicenseAssignment:
        self.db.add(assignment_model)
        self.db.flush()
        return assignment_model

    def list_for_host(self, host_id: int) -> List[Dict[str, Any]]:
        rows = (
            self.db.query(
                models.License.id.label("license_id"),
                models.License.name.label("license_name"),
                models.License.license_type,
                models.Software.name.label("software_name"),
                models.Software.major_version,
                models.LicenseAssignment.assigned_on,
            )
            .select_from(models.LicenseAssignment)
            .join(models.License, models.License.id == models.LicenseAssignment.license_id)
            .join(models.Software, models.Software.id == models.License.software_id)
            .filter(models.LicenseAssignment.host_id == host_id)
            .order_by(models.Software.name.asc(), models.License.name.asc())
            .all()
        )
        return [row._asdict() for row in rows]

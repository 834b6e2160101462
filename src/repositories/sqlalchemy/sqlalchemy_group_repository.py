from typing import List, Optional, Dict, Any, Iterable
from sqlalchemy import insert
from sqlalchemy.orm import Session, joinedload
from src.database import models
from src.repositories.interfaces import IGroupRepository

class SqlalchemyGroupRepository(IGroupRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_id(self, group_id: int) -> Optional[models.UserGroup]:
        return self.db.query(models.UserGroup).filter(models.UserGroup.id == group_id).first()

    def find_by_name(self, name: str) -> Optional[models.UserGroup]:
        return self.db.query(models.UserGroup).filter(models.UserGroup.name == name).first()

    def find_permission_name(self, group_id: int) -> Optional[str]:
        row = (
            self.db.query(models.Permission.name)
            .join(models.UserGroup, models.UserGroup.permission_id == models.Permission.id)
            .filter(models.UserGroup.id == group_id)
            .first()
        )
        return row[0] if row else None

    def list_platform_ids(self, group_id: int) -> List[int]:
        rows = (
            self.db.query(models.GroupPlatformAccess.platform_id)
            .filter(models.GroupPlatformAccess.user_group_id == group_id)
            .order_by(models.GroupPlatformAccess.platform_id.asc())
            .all()
        )
        return [row[0] for row in rows]

    def list_all(self) -> List[Dict[str, Any]]:
        groups = (
            self.db.query(models.UserGroup)
            .options(joinedload(models.UserGroup.permission), joinedload(models.UserGroup.platform_access))
            .order_by(models.UserGroup.name.asc())
            .all()
        )
        return [
            {
                "id": g.id,
                "name": g.name,
                "permission_name": g.permission.name if g.permission else None,
                "platform_ids": sorted(a.platform_id for a in g.platform_access),
            }
            for g in groups
        ]

    def create(self, group_model: models.UserGroup) -> models.UserGroup:
        self.db.add(group_model)
        self.db.flush()
        return group_model

    def set_permission(self, group: models.UserGroup, permission: models.Permission) -> models.UserGroup:
        group.permission_id = permission.id
        self.db.flush()
        return group

    def replace_platform_access(self, group_id: int, platform_ids: Iterable[int]):
        self.db.query(models.GroupPlatformAccess).filter(
            models.GroupPlatformAccess.user_group_id == group_id
        ).delete(synchronize_session=False)
        rows = [{"user_group_id": group_id, "platform_id": pid} for pid in sorted(set(platform_ids))]
        if rows:
            self.db.execute(insert(models.GroupPlatformAccess), rows)

from typing import List, Optional, Dict, Any
from sqlalchemy.orm import Session
from src.database import models
from src.repositories.interfaces import IUserRepository

class SqlalchemyUserRepository(IUserRepository):
    def __init__(self, db_session: Session):
        self.db = db_session

    def find_by_id(self, user_id: int) -> Optional[models.User]:
        return self.db.query(models.User).filter(models.User.id == user_id).first()

    def list_with_groups(self) -> List[Dict[str, Any]]:
        rows = (
            self.db.query(
                models.User.id,
                models.User.display_name,
                models.User.company_username,
                models.User.email,
                models.User.user_group_id,
                models.UserGroup.name.label("user_group_name"),
            )
            .outerjoin(models.UserGroup, models.User.user_group_id == models.UserGroup.id)
            .order_by(models.User.display_name.asc())
            .all()
        )
        return [row._asdict() for row in rows]

    def set_group(self, user: models.User, group_id: Optional[int]) -> models.User:
        user.user_group_id = group_id
        self.db.flush()
        return user

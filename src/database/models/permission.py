from sqlalchemy import Column, Integer, String
from ..database import Base

class Permission(Base):
    """
    그룹에 부여되는 권한 레벨을 정의합니다.
    (예: 'Admin', 'Edit', 'Read', 'Default').
    """
    __tablename__ = "permissions"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

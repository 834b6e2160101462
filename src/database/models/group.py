from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class UserGroup(Base):
    """
    사용자 그룹. 하나의 권한 레벨(Permission)을 가지며,
    GroupPlatformAccess를 통해 접근 가능한 플랫폼 집합을 정의합니다.
    """
    __tablename__ = "user_groups"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)
    permission_id = Column(Integer, ForeignKey("permissions.id"), nullable=False)

    permission = relationship("Permission")
    users = relationship("User", back_populates="group")
    platform_access = relationship("GroupPlatformAccess", back_populates="group", cascade="all, delete-orphan")

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class User(Base):
    """
    시스템을 사용하는 사람을 나타냅니다. 인증은 외부 자격 증명 제공자가 담당하고,
    여기에는 권한 판정에 필요한 그룹 소속만 저장합니다.
    그룹이 없는 사용자도 정상 상태이며, 이 경우 'Default' 권한이 적용됩니다.
    """
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    display_name = Column(String, nullable=False)
    company_username = Column(String, nullable=True)
    email = Column(String, unique=True, nullable=False)

    user_group_id = Column(Integer, ForeignKey("user_groups.id", ondelete="SET NULL"), nullable=True)
    group = relationship("UserGroup", back_populates="users")

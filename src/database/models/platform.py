from sqlalchemy import Column, Integer, String
from ..database import Base

class Platform(Base):
    """
    벤치를 분류하고 가시성과 권한 범위를 정하는 플랫폼.
    처음 사용될 때 생성되며, 이름은 유일해야 합니다.
    """
    __tablename__ = "platforms"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)

from sqlalchemy import Column, Integer, String
from ..database import Base

class VM(Base):
    """
    라이선스와 소프트웨어를 할당받을 수 있는 가상 머신 인스턴스.
    플랫폼 분류가 없으므로 플랫폼 범위 권한 검사를 받지 않습니다.
    """
    __tablename__ = "vm_instances"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    address = Column(String, nullable=True)

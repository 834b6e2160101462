from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from ..database import Base

class Host(Base):
    """
    테스트 벤치에 연결된 컴퓨트 호스트 (UI의 'PC overview', API의 'server').
    status는 active_user와 오프라인 강제 여부에서 계산된 값만 저장됩니다.
    """
    __tablename__ = "hosts"
    id = Column(Integer, primary_key=True, index=True)
    bench_id = Column(Integer, ForeignKey("benches.id"), nullable=True)
    name = Column(String, nullable=False)
    info_text = Column(String, nullable=True)
    status = Column(String, nullable=False, default="online")
    active_user = Column(String, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

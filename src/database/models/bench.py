from sqlalchemy import Column, Integer, String, ForeignKey
from ..database import Base

class Bench(Base):
    """
    물리적인 테스트 벤치(HIL 리그)를 나타냅니다.
    호스트(Host)는 벤치에 소속되고, 벤치는 BenchPlatformLink로 플랫폼에 분류됩니다.
    """
    __tablename__ = "benches"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    bench_type = Column(String, nullable=True)


class BenchPlatformLink(Base):
    """
    벤치의 플랫폼 분류. 벤치당 최대 하나이며 bench_id가 기본 키입니다.
    플랫폼이 없으면 행 자체가 없습니다.
    """
    __tablename__ = "bench_platforms"
    bench_id = Column(Integer, ForeignKey("benches.id", ondelete="CASCADE"), primary_key=True)
    platform_id = Column(Integer, ForeignKey("platforms.id"), nullable=False)

from sqlalchemy import Column, Integer, String
from ..database import Base

class Software(Base):
    """소프트웨어 카탈로그 항목 (예: 'ControlDesk 7.2')."""
    __tablename__ = "software"
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    major_version = Column(String, nullable=True)
    vendor = Column(String, nullable=True)

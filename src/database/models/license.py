from sqlalchemy import Column, Integer, String, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from ..database import Base

class License(Base):
    """소프트웨어 라이선스. 한 번에 하나의 호스트 또는 VM에만 할당됩니다."""
    __tablename__ = "licenses"
    id = Column(Integer, primary_key=True, index=True)
    software_id = Column(Integer, ForeignKey("software.id"), nullable=False)
    name = Column(String, nullable=True)
    license_type = Column(String, nullable=True)

    software = relationship("Software")


class LicenseAssignment(Base):
    """
    라이선스의 현재 할당. license_id가 유일하므로 라이선스당 최대 한 행이며,
    host_id와 vm_id 중 정확히 하나만 채워져야 합니다.
    """
    __tablename__ = "license_assignments"
    __table_args__ = (
        CheckConstraint(
            "(host_id IS NULL AND vm_id IS NOT NULL) OR (host_id IS NOT NULL AND vm_id IS NULL)",
            name="ck_license_assignment_single_target",
        ),
    )
    id = Column(Integer, primary_key=True, index=True)
    license_id = Column(Integer, ForeignKey("licenses.id", ondelete="CASCADE"), unique=True, nullable=False)
    host_id = Column(Integer, ForeignKey("hosts.id", ondelete="CASCADE"), nullable=True)
    vm_id = Column(Integer, ForeignKey("vm_instances.id", ondelete="CASCADE"), nullable=True)
    assigned_on = Column(String, nullable=True)

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from ..database import Base

class GroupPlatformAccess(Base):
    """
    그룹(UserGroup)과 플랫폼(Platform) 사이의 다대다 관계를 연결하는 연관 테이블입니다.
    어떤 그룹이 어떤 플랫폼의 서버를 볼 수 있는지를 정의합니다.
    """
    __tablename__ = "group_platform_access"
    user_group_id = Column(Integer, ForeignKey("user_groups.id", ondelete="CASCADE"), primary_key=True)
    platform_id = Column(Integer, ForeignKey("platforms.id"), primary_key=True)

    group = relationship("UserGroup", back_populates="platform_access")
    platform = relationship("Platform")


class HostSoftware(Base):
    """호스트에 설치된 소프트웨어. (host_id, software_id) 쌍은 유일합니다."""
    __tablename__ = "host_software"
    host_id = Column(Integer, ForeignKey("hosts.id", ondelete="CASCADE"), primary_key=True)
    software_id = Column(Integer, ForeignKey("software.id", ondelete="CASCADE"), primary_key=True)
    install_date = Column(String, nullable=True)


class VmSoftware(Base):
    """VM에 설치된 소프트웨어. (vm_id, software_id) 쌍은 유일합니다."""
    __tablename__ = "vm_software"
    vm_id = Column(Integer, ForeignKey("vm_instances.id", ondelete="CASCADE"), primary_key=True)
    software_id = Column(Integer, ForeignKey("software.id", ondelete="CASCADE"), primary_key=True)
    install_date = Column(String, nullable=True)

from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any
from src.database import models

class ILicenseRepository(ABC):
    @abstractmethod
    def find_by_id(self, license_id: int) -> Optional[models.License]:
        """고유 ID로 라이선스를 조회합니다."""
        pass

    @abstractmethod
    def find_assignment(self, license_id: int) -> Optional[models.LicenseAssignment]:
        """라이선스의 현재 할당을 조회합니다."""
        pass

    @abstractmethod
    def delete_assignments(self, license_id: int) -> int:
        """라이선스의 모든 할당을 삭제하고 삭제된 행 수를 반환합니다. (커밋하지 않음)"""
        pass

    @abstractmethod
    def create_assignment(self, assignment_model: models.LicenseAssignment) -> models.LicenseAssignment:
        """새 할당 행을 추가합니다. (커밋하지 않음)"""
        pass

    @abstractmethod
    def list_for_host(self, host_id: int) -> List[Dict[str, Any]]:
        """호스트에 할당된 라이선스를 소프트웨어 정보와 함께 조회합니다."""
        pass

from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any
from src.database import models

class ISoftwareRepository(ABC):
    @abstractmethod
    def find_by_id(self, software_id: int) -> Optional[models.Software]:
        """고유 ID로 소프트웨어 카탈로그 항목을 조회합니다."""
        pass

    @abstractmethod
    def insert_assignment_if_absent(self, target: str, target_id: int, software_id: int, install_date: Optional[str]) -> bool:
        """
        대상(host 또는 vm)에 소프트웨어 할당 행을 추가합니다. 이미 있으면 아무것도 하지 않습니다.

        Returns:
            새 행이 삽입되었으면 True.
        """
        pass

    @abstractmethod
    def delete_assignment(self, target: str, target_id: int, software_id: int) -> int:
        """할당 행을 삭제하고 삭제된 행 수를 반환합니다."""
        pass

    @abstractmethod
    def list_assignments(self, target: str, target_id: int) -> List[Dict[str, Any]]:
        """대상에 할당된 소프트웨어 목록을 조회합니다."""
        pass

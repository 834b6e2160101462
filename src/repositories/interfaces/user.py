from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any
from src.database import models

class IUserRepository(ABC):
    @abstractmethod
    def find_by_id(self, user_id: int) -> Optional[models.User]:
        """고유 ID로 특정 사용자를 조회합니다."""
        pass

    @abstractmethod
    def list_with_groups(self) -> List[Dict[str, Any]]:
        """모든 사용자와 소속 그룹 이름을 조회합니다."""
        pass

    @abstractmethod
    def set_group(self, user: models.User, group_id: Optional[int]) -> models.User:
        """사용자의 소속 그룹을 변경합니다. None이면 그룹에서 제외합니다."""
        pass

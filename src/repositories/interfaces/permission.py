from abc import ABC, abstractmethod
from typing import List, Optional
from src.database import models

class IPermissionRepository(ABC):
    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.Permission]:
        """이름으로 특정 권한 레벨을 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[models.Permission]:
        """모든 권한 레벨을 조회합니다."""
        pass

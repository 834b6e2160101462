from abc import ABC, abstractmethod
from typing import Optional
from src.database import models

class IVMRepository(ABC):
    @abstractmethod
    def find_by_id(self, vm_id: int) -> Optional[models.VM]:
        """고유 ID로 특정 VM을 조회합니다."""
        pass

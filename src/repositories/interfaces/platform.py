from abc import ABC, abstractmethod
from typing import List, Optional, Iterable, Set
from src.database import models

class IPlatformRepository(ABC):
    @abstractmethod
    def find_by_name(self, name: str, for_update: bool = False) -> Optional[models.Platform]:
        """
        이름으로 특정 플랫폼을 조회합니다.
        for_update=True이면 잠금 읽기로 조회하여 다른 트랜잭션이 방금 커밋한 행도 보이게 합니다.
        """
        pass

    @abstractmethod
    def insert_if_absent(self, name: str) -> bool:
        """
        플랫폼 행을 삽입하되, 같은 이름이 이미 있으면 아무것도 하지 않습니다.
        동시에 같은 이름을 삽입해도 실패하거나 중복 행이 생기지 않아야 합니다.

        Returns:
            이번 호출로 새 행이 삽입되었으면 True.
        """
        pass

    @abstractmethod
    def list_all(self) -> List[models.Platform]:
        """모든 플랫폼을 이름순으로 조회합니다."""
        pass

    @abstractmethod
    def find_existing_ids(self, platform_ids: Iterable[int]) -> Set[int]:
        """주어진 ID 중 실제로 존재하는 플랫폼 ID만 반환합니다."""
        pass

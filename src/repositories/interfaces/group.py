from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any, Iterable
from src.database import models

class IGroupRepository(ABC):
    @abstractmethod
    def find_by_id(self, group_id: int) -> Optional[models.UserGroup]:
        """고유 ID로 특정 그룹을 조회합니다."""
        pass

    @abstractmethod
    def find_by_name(self, name: str) -> Optional[models.UserGroup]:
        """이름으로 특정 그룹을 조회합니다."""
        pass

    @abstractmethod
    def find_permission_name(self, group_id: int) -> Optional[str]:
        """
        그룹에 연결된 권한 레벨의 이름을 조회합니다.
        그룹이나 권한 행이 없으면 None을 반환합니다.
        """
        pass

    @abstractmethod
    def list_platform_ids(self, group_id: int) -> List[int]:
        """그룹이 접근할 수 있는 플랫폼 ID 목록을 조회합니다."""
        pass

    @abstractmethod
    def list_all(self) -> List[Dict[str, Any]]:
        """
        모든 그룹을 권한 이름, 접근 가능한 플랫폼 ID와 함께 조회합니다.
        (예: [{'id': 1, 'name': 'HIL Team', 'permission_name': 'Edit', 'platform_ids': [3, 7]}])
        """
        pass

    @abstractmethod
    def create(self, group_model: models.UserGroup) -> models.UserGroup:
        """새로운 그룹을 생성합니다."""
        pass

    @abstractmethod
    def set_permission(self, group: models.UserGroup, permission: models.Permission) -> models.UserGroup:
        """그룹의 권한 레벨을 변경합니다."""
        pass

    @abstractmethod
    def replace_platform_access(self, group_id: int, platform_ids: Iterable[int]):
        """그룹의 플랫폼 접근 목록을 주어진 ID 집합으로 교체합니다."""
        pass

from abc import ABC, abstractmethod
from typing import List, Optional, Dict, Any, Collection
from src.database import models

class IServerRepository(ABC):
    """서버 집합체(Bench + Host + BenchPlatformLink)에 대한 저장소."""

    @abstractmethod
    def find_host(self, host_id: int) -> Optional[models.Host]:
        """고유 ID로 호스트를 조회합니다."""
        pass

    @abstractmethod
    def find_bench(self, bench_id: int) -> Optional[models.Bench]:
        """고유 ID로 벤치를 조회합니다."""
        pass

    @abstractmethod
    def find_platform_id_for_bench(self, bench_id: Optional[int]) -> Optional[int]:
        """벤치의 현재 플랫폼 ID를 조회합니다. 벤치나 분류가 없으면 None."""
        pass

    @abstractmethod
    def create_bench(self, bench_model: models.Bench) -> models.Bench:
        """벤치를 추가하고 ID를 할당받습니다. (커밋하지 않음)"""
        pass

    @abstractmethod
    def create_host(self, host_model: models.Host) -> models.Host:
        """호스트를 추가하고 ID를 할당받습니다. (커밋하지 않음)"""
        pass

    @abstractmethod
    def save_host(self, host: models.Host) -> models.Host:
        """변경된 호스트를 반영합니다. (커밋하지 않음)"""
        pass

    @abstractmethod
    def save_bench(self, bench: models.Bench) -> models.Bench:
        """변경된 벤치를 반영합니다. (커밋하지 않음)"""
        pass

    @abstractmethod
    def upsert_bench_platform(self, bench_id: int, platform_id: int):
        """벤치의 플랫폼 분류를 생성하거나 덮어씁니다."""
        pass

    @abstractmethod
    def delete_bench_platform(self, bench_id: int):
        """벤치의 플랫폼 분류를 제거합니다. 없으면 아무것도 하지 않습니다."""
        pass

    @abstractmethod
    def delete_host(self, host: models.Host):
        """호스트 행만 삭제합니다. 벤치와 플랫폼 분류는 남겨둡니다."""
        pass

    @abstractmethod
    def find_view(self, host_id: int) -> Optional[Dict[str, Any]]:
        """호스트 하나의 조인된 조회 형태를 반환합니다."""
        pass

    @abstractmethod
    def list_views(self, platform_ids: Optional[Collection[int]] = None) -> List[Dict[str, Any]]:
        """
        호스트, 벤치, 벤치 유형, 플랫폼 이름을 조인한 목록을 조회합니다.

        Args:
            platform_ids: None이면 전체를, 아니면 해당 플랫폼에 분류된 호스트만 반환합니다.

        Returns:
            host_id, bench_name, host_name, bench_type, info_text, status,
            active_user, platform_id, platform_name 키를 가진 딕셔너리의 리스트.
        """
        pass

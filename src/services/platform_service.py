import logging
from typing import Optional, List, Dict, Any

from src.repositories.interfaces import IPlatformRepository
from src.schemas.admin import PlatformView
from src.services.exceptions import InternalError

logger = logging.getLogger(__name__)


def normalize_platform_name(name: Optional[str]) -> Optional[str]:
    """앞뒤 공백을 제거합니다. 비어 있으면 None('플랫폼 없음')."""
    if name is None:
        return None
    name = name.strip()
    return name or None


class PlatformRegistry:
    """사람이 입력한 플랫폼 이름을 안정적인 플랫폼 ID로 바꿔줍니다."""

    def __init__(self, platform_repo: IPlatformRepository):
        self.platform_repo = platform_repo

    def find(self, name: Optional[str]) -> Optional[int]:
        """
        이름으로 플랫폼 ID를 조회만 합니다. (행을 만들지 않음)

        Returns:
            플랫폼 ID. 이름이 비어 있거나 등록되지 않았으면 None.
        """
        name = normalize_platform_name(name)
        if name is None:
            return None
        platform = self.platform_repo.find_by_name(name)
        return platform.id if platform else None

    def resolve_or_create(self, name: Optional[str]) -> Optional[int]:
        """
        이름으로 플랫폼 ID를 찾고, 없으면 새로 만든 뒤 ID를 반환합니다.

        먼저 조회 후 없으면 충돌을 무시하는 INSERT를 실행하고 다시 읽어옵니다.
        같은 새 이름을 여러 호출자가 동시에 처리해도 행은 하나만 생기고
        모두 같은 ID를 받습니다. 호출자의 트랜잭션 안에서 실행되며 커밋하지 않습니다.

        Args:
            name: 플랫폼 이름. 비어 있으면 '플랫폼 없음'.

        Returns:
            플랫폼 ID, 또는 이름이 비어 있으면 None.
        """
        name = normalize_platform_name(name)
        if name is None:
            return None

        platform = self.platform_repo.find_by_name(name)
        if platform:
            return platform.id

        if self.platform_repo.insert_if_absent(name):
            logger.info("Created platform '%s'.", name)
        # REPEATABLE READ 스냅샷에는 동시에 커밋된 행이 보이지 않으므로 잠금 읽기로 다시 조회합니다.
        platform = self.platform_repo.find_by_name(name, for_update=True)
        if platform is None:
            raise InternalError(f"Platform '{name}' could not be read back after insert.")
        return platform.id

    def list_platforms(self) -> List[Dict[str, Any]]:
        """모든 플랫폼을 이름순으로 조회합니다."""
        return [PlatformView.model_validate(p).to_dict() for p in self.platform_repo.list_all()]

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional

from src.repositories.interfaces import IUserRepository, IGroupRepository
from src.services.exceptions import ForbiddenError

logger = logging.getLogger(__name__)


class PermissionLevel(str, Enum):
    ADMIN = "Admin"
    EDIT = "Edit"
    READ = "Read"
    DEFAULT = "Default"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "PermissionLevel":
        for level in cls:
            if level.value == name:
                return level
        return cls.DEFAULT


@dataclass(frozen=True)
class PermissionContext:
    """한 요청 동안 사용되는 호출자의 권한 레벨과 접근 가능한 플랫폼 집합."""
    level: PermissionLevel = PermissionLevel.DEFAULT
    accessible_platform_ids: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def permission_name(self) -> str:
        return self.level.value

    @property
    def is_admin(self) -> bool:
        return self.level is PermissionLevel.ADMIN

    @property
    def can_edit(self) -> bool:
        return self.level in (PermissionLevel.ADMIN, PermissionLevel.EDIT)

    def can_access(self, platform_id: Optional[int]) -> bool:
        """Admin은 모든 플랫폼에, 그 외에는 집합에 포함된 플랫폼과 '플랫폼 없음'에 접근할 수 있습니다."""
        if self.is_admin or platform_id is None:
            return True
        return platform_id in self.accessible_platform_ids

    def can_view(self, platform_id: Optional[int]) -> bool:
        """조회 권한. 목록과 같은 규칙으로, Admin이 아니면 '플랫폼 없음'은 보이지 않습니다."""
        if self.is_admin:
            return True
        return platform_id is not None and platform_id in self.accessible_platform_ids

    def require_edit(self, action: str):
        if not self.can_edit:
            raise ForbiddenError(f"Permission '{self.permission_name}' is not allowed to {action}.")

    def require_admin(self, action: str):
        if not self.is_admin:
            raise ForbiddenError(f"Only Admin may {action}.")


DEFAULT_CONTEXT = PermissionContext()


class PermissionResolver:
    """사용자 ID로부터 권한 레벨과 접근 가능한 플랫폼 집합을 계산합니다."""

    def __init__(self, user_repo: IUserRepository, group_repo: IGroupRepository):
        self.user_repo = user_repo
        self.group_repo = group_repo

    def resolve(self, user_id: int) -> PermissionContext:
        """
        사용자의 권한 컨텍스트를 조회합니다. 이 메서드는 예외를 던지지 않습니다.

        사용자가 없거나 그룹이 없으면 정상적으로 Default/빈 집합을 반환하고,
        그룹의 권한 행이 없거나 조회 중 오류가 나면 Default/빈 집합으로 낮춰서 반환합니다.
        결과는 요청 간에 캐시하지 않습니다.

        Args:
            user_id: 외부 인증을 통과한 사용자의 ID.

        Returns:
            PermissionContext.
        """
        try:
            user = self.user_repo.find_by_id(user_id)
            if user is None or user.user_group_id is None:
                logger.warning("User %s not found or not assigned to a group. Applying Default permissions.", user_id)
                return DEFAULT_CONTEXT

            group_id = user.user_group_id
            permission_name = self.group_repo.find_permission_name(group_id)
            if permission_name is None:
                logger.error("Could not find permission details for group %s. Applying Default permissions.", group_id)
                return DEFAULT_CONTEXT

            level = PermissionLevel.from_name(permission_name)
            if level.value != permission_name:
                logger.warning("Unknown permission '%s' on group %s. Applying Default permissions.", permission_name, group_id)
                return DEFAULT_CONTEXT

            platform_ids = self.group_repo.list_platform_ids(group_id)
            return PermissionContext(level=level, accessible_platform_ids=frozenset(platform_ids))
        except Exception:
            logger.exception("Error fetching permissions for user %s. Applying Default permissions.", user_id)
            return DEFAULT_CONTEXT

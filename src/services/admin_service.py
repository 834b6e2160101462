import logging
from typing import Any, Dict, List

from src.database import models
from src.repositories.interfaces import (
    IUserRepository, IGroupRepository, IPermissionRepository, IPlatformRepository, IUnitOfWork
)
from src.schemas.admin import (
    GroupCreateRequest, GroupPermissionRequest, GroupPlatformsRequest, UserGroupRequest,
    GroupView, UserView, PermissionView,
)
from src.schemas.base import parse_payload
from src.services.exceptions import (
    ValidationError, ConflictError, UserNotFoundError, GroupNotFoundError, PlatformNotFoundError,
)
from src.services.permission_service import PermissionContext, PermissionLevel

logger = logging.getLogger(__name__)


class AdminService:
    """그룹, 그룹의 권한 레벨과 플랫폼 접근, 사용자의 그룹 소속을 관리합니다. 모든 작업은 Admin 전용입니다."""

    def __init__(self, user_repo: IUserRepository, group_repo: IGroupRepository,
                 permission_repo: IPermissionRepository, platform_repo: IPlatformRepository,
                 unit_of_work: IUnitOfWork):
        self.user_repo = user_repo
        self.group_repo = group_repo
        self.permission_repo = permission_repo
        self.platform_repo = platform_repo
        self.unit_of_work = unit_of_work

    def list_permissions(self, ctx: PermissionContext) -> List[Dict[str, Any]]:
        ctx.require_admin("list permission levels")
        return [PermissionView.model_validate(p).to_dict() for p in self.permission_repo.list_all()]

    def list_groups(self, ctx: PermissionContext) -> List[Dict[str, Any]]:
        ctx.require_admin("list groups")
        return [GroupView.model_validate(g).to_dict() for g in self.group_repo.list_all()]

    def list_users(self, ctx: PermissionContext) -> List[Dict[str, Any]]:
        ctx.require_admin("list users")
        return [UserView.model_validate(u).to_dict() for u in self.user_repo.list_with_groups()]

    def create_group(self, ctx: PermissionContext, payload: Any) -> Dict[str, Any]:
        """
        새 그룹을 생성합니다. 플랫폼 접근 목록은 비어 있는 상태로 시작합니다.

        Raises:
            ValidationError: 권한 이름이 잘못되었을 때.
            ConflictError: 같은 이름의 그룹이 이미 있을 때.
        """
        ctx.require_admin("create groups")
        request = parse_payload(GroupCreateRequest, payload)
        permission = self._get_permission(request.permission_name)
        if self.group_repo.find_by_name(request.name):
            raise ConflictError(f"Group with name '{request.name}' already exists.")

        with self.unit_of_work.atomic():
            group = self.group_repo.create(models.UserGroup(name=request.name, permission_id=permission.id))
            group_id = group.id

        logger.info("Created group %s '%s' with permission %s.", group_id, request.name, permission.name)
        return GroupView(id=group_id, name=request.name, permission_name=permission.name).to_dict()

    def set_group_permission(self, ctx: PermissionContext, group_id: int, payload: Any) -> bool:
        """
        그룹의 권한 레벨을 변경합니다. 변경은 다음 요청부터 바로 반영됩니다. (권한 캐시 없음)

        Raises:
            GroupNotFoundError: 그룹이 없을 때.
            ValidationError: 권한 이름이 잘못되었을 때.
        """
        ctx.require_admin("change group permissions")
        request = parse_payload(GroupPermissionRequest, payload)
        group = self._get_group(group_id)
        permission = self._get_permission(request.permission_name)

        with self.unit_of_work.atomic():
            self.group_repo.set_permission(group, permission)

        logger.info("Group %s permission set to %s.", group_id, permission.name)
        return True

    def set_group_platforms(self, ctx: PermissionContext, group_id: int, payload: Any) -> bool:
        """
        그룹의 플랫폼 접근 목록을 한 트랜잭션으로 통째로 교체합니다.

        Raises:
            GroupNotFoundError: 그룹이 없을 때.
            PlatformNotFoundError: 존재하지 않는 플랫폼 ID가 섞여 있을 때.
        """
        ctx.require_admin("change group platform access")
        request = parse_payload(GroupPlatformsRequest, payload)
        self._get_group(group_id)

        requested = set(request.platform_ids)
        missing = requested - self.platform_repo.find_existing_ids(requested)
        if missing:
            raise PlatformNotFoundError(f"Platform id(s) {sorted(missing)} not found.")

        with self.unit_of_work.atomic():
            self.group_repo.replace_platform_access(group_id, requested)

        logger.info("Group %s platform access set to %s.", group_id, sorted(requested))
        return True

    def set_user_group(self, ctx: PermissionContext, user_id: int, payload: Any) -> Dict[str, Any]:
        """
        사용자의 그룹 소속을 변경합니다. userGroupId가 null이면 그룹에서 제외합니다.

        Raises:
            UserNotFoundError: 사용자가 없을 때.
            GroupNotFoundError: 그룹이 없을 때.
        """
        ctx.require_admin("change user groups")
        request = parse_payload(UserGroupRequest, payload)
        user = self.user_repo.find_by_id(user_id)
        if not user:
            raise UserNotFoundError(f"User with id '{user_id}' not found.")
        if request.user_group_id is not None:
            self._get_group(request.user_group_id)

        with self.unit_of_work.atomic():
            self.user_repo.set_group(user, request.user_group_id)

        logger.info("User %s moved to group %s.", user_id, request.user_group_id)
        return {"userId": user_id, "userGroupId": request.user_group_id}

    def _get_group(self, group_id: int) -> models.UserGroup:
        group = self.group_repo.find_by_id(group_id)
        if not group:
            raise GroupNotFoundError(f"Group with id '{group_id}' not found.")
        return group

    def _get_permission(self, permission_name: str) -> models.Permission:
        if PermissionLevel.from_name(permission_name).value != permission_name:
            raise ValidationError(f"Unknown permission '{permission_name}'.")
        permission = self.permission_repo.find_by_name(permission_name)
        if not permission:
            raise ValidationError(f"Permission '{permission_name}' is not configured.")
        return permission

# tests/services/test_admin_service.py
import pytest
from unittest.mock import MagicMock

from src.services.admin_service import AdminService
from src.services.permission_service import PermissionContext, PermissionLevel
from src.services.exceptions import *
from src.repositories.interfaces import (
    IUserRepository, IGroupRepository, IPermissionRepository, IPlatformRepository, IUnitOfWork
)
from src.database import models

ADMIN = PermissionContext(PermissionLevel.ADMIN)

# ===================================================================
#  Fixture 설정
# ===================================================================

@pytest.fixture
def mock_user_repo() -> MagicMock:
    return MagicMock(spec=IUserRepository)

@pytest.fixture
def mock_group_repo() -> MagicMock:
    repo = MagicMock(spec=IGroupRepository)
    repo.find_by_id.side_effect = lambda group_id: models.UserGroup(id=group_id, name="HIL Team") if group_id == 4 else None
    repo.find_by_name.return_value = None
    return repo

@pytest.fixture
def mock_permission_repo() -> MagicMock:
    repo = MagicMock(spec=IPermissionRepository)
    repo.find_by_name.side_effect = lambda name: models.Permission(id=2, name=name)
    return repo

@pytest.fixture
def mock_platform_repo() -> MagicMock:
    return MagicMock(spec=IPlatformRepository)

@pytest.fixture
def mock_unit_of_work() -> MagicMock:
    return MagicMock(spec=IUnitOfWork)

@pytest.fixture
def admin_service(mock_user_repo, mock_group_repo, mock_permission_repo, mock_platform_repo, mock_unit_of_work):
    return AdminService(mock_user_repo, mock_group_repo, mock_permission_repo, mock_platform_repo, mock_unit_of_work)

# ===================================================================
#  그룹 관리 테스트
# ===================================================================
class TestGroups:
    def test_create_group(self, admin_service, mock_group_repo):
        """새 그룹을 만들면 권한 이름과 빈 플랫폼 목록이 반환됩니다."""
        # === Arrange ===
        def _create(group):
            group.id = 10
            return group
        mock_group_repo.create.side_effect = _create

        # === Act ===
        group = admin_service.create_group(ADMIN, {"name": "Powertrain", "permissionName": "Edit"})

        # === Assert ===
        assert group == {"id": 10, "name": "Powertrain", "permissionName": "Edit", "platformIds": []}
        assert mock_group_repo.create.call_args.args[0].permission_id == 2

    def test_create_duplicate_group(self, admin_service, mock_group_repo, mock_unit_of_work):
        mock_group_repo.find_by_name.return_value = models.UserGroup(id=4, name="HIL Team")

        with pytest.raises(ConflictError):
            admin_service.create_group(ADMIN, {"name": "HIL Team", "permissionName": "Read"})
        mock_unit_of_work.atomic.assert_not_called()

    def test_create_group_unknown_permission(self, admin_service):
        with pytest.raises(ValidationError):
            admin_service.create_group(ADMIN, {"name": "Powertrain", "permissionName": "Owner"})

    def test_set_group_platforms(self, admin_service, mock_group_repo, mock_platform_repo):
        """그룹의 플랫폼 접근 목록을 통째로 교체합니다."""
        mock_platform_repo.find_existing_ids.return_value = {3, 7}

        assert admin_service.set_group_platforms(ADMIN, 4, {"platformIds": [7, 3, 7]}) is True
        mock_group_repo.replace_platform_access.assert_called_once_with(4, {3, 7})

    def test_set_group_platforms_unknown_platform(self, admin_service, mock_group_repo, mock_platform_repo):
        mock_platform_repo.find_existing_ids.return_value = {7}

        with pytest.raises(PlatformNotFoundError, match=r"\[99\]"):
            admin_service.set_group_platforms(ADMIN, 4, {"platformIds": [7, 99]})
        mock_group_repo.replace_platform_access.assert_not_called()

    def test_set_permission_of_missing_group(self, admin_service):
        with pytest.raises(GroupNotFoundError):
            admin_service.set_group_permission(ADMIN, 5, {"permissionName": "Read"})

    def test_set_group_permission(self, admin_service, mock_group_repo):
        admin_service.set_group_permission(ADMIN, 4, {"permissionName": "Read"})

        group, permission = mock_group_repo.set_permission.call_args.args
        assert group.id == 4
        assert permission.name == "Read"

# ===================================================================
#  사용자 관리 및 권한 검사 테스트
# ===================================================================
class TestUsers:
    def test_set_user_group(self, admin_service, mock_user_repo):
        user = models.User(id=3, email="kim@example.com", user_group_id=None)
        mock_user_repo.find_by_id.return_value = user

        result = admin_service.set_user_group(ADMIN, 3, {"userGroupId": 4})

        assert result == {"userId": 3, "userGroupId": 4}
        mock_user_repo.set_group.assert_called_once_with(user, 4)

    def test_remove_user_from_group(self, admin_service, mock_user_repo, mock_group_repo):
        mock_user_repo.find_by_id.return_value = models.User(id=3, email="kim@example.com", user_group_id=4)

        result = admin_service.set_user_group(ADMIN, 3, {"userGroupId": None})

        assert result["userGroupId"] is None
        mock_group_repo.find_by_id.assert_not_called()

    def test_set_group_of_missing_user(self, admin_service, mock_user_repo):
        mock_user_repo.find_by_id.return_value = None

        with pytest.raises(UserNotFoundError):
            admin_service.set_user_group(ADMIN, 3, {"userGroupId": 4})

    @pytest.mark.parametrize("level", [PermissionLevel.EDIT, PermissionLevel.READ, PermissionLevel.DEFAULT])
    def test_admin_operations_require_admin(self, admin_service, mock_group_repo, level):
        """Admin이 아닌 사용자는 그룹 목록조차 볼 수 없습니다."""
        with pytest.raises(ForbiddenError):
            admin_service.list_groups(PermissionContext(level))
        mock_group_repo.list_all.assert_not_called()

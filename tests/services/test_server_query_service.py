# tests/services/test_server_query_service.py
import pytest
from unittest.mock import MagicMock

from src.services.server_query_service import ServerQueryService
from src.services.permission_service import PermissionContext, PermissionLevel
from src.services.exceptions import *
from src.repositories.interfaces import IServerRepository


def row(host_id, platform_id):
    return {
        "host_id": host_id,
        "bench_name": f"bench-{host_id}",
        "host_name": f"pc-{host_id}",
        "bench_type": None,
        "info_text": "",
        "status": "online",
        "active_user": None,
        "platform_id": platform_id,
        "platform_name": None if platform_id is None else f"P{platform_id}",
    }


@pytest.fixture
def mock_server_repo() -> MagicMock:
    """IServerRepository에 대한 모의 객체를 생성합니다."""
    return MagicMock(spec=IServerRepository)

@pytest.fixture
def query_service(mock_server_repo) -> ServerQueryService:
    return ServerQueryService(mock_server_repo)

# ===================================================================
#  list_servers 테스트
# ===================================================================
class TestListServers:
    def test_admin_sees_everything(self, query_service, mock_server_repo):
        """Admin은 플랫폼 필터 없이 전체 목록을 받습니다."""
        mock_server_repo.list_views.return_value = [row(1, 7), row(2, None)]

        servers = query_service.list_servers(PermissionContext(PermissionLevel.ADMIN))

        assert [s["hostId"] for s in servers] == [1, 2]
        mock_server_repo.list_views.assert_called_once_with()

    def test_empty_access_set_returns_empty_list(self, query_service, mock_server_repo):
        """접근 가능한 플랫폼이 없는 Read 사용자는 오류 없이 빈 목록을 받습니다."""
        servers = query_service.list_servers(PermissionContext(PermissionLevel.READ))

        assert servers == []
        mock_server_repo.list_views.assert_not_called()

    def test_filtered_by_accessible_platforms(self, query_service, mock_server_repo):
        # === Arrange ===
        mock_server_repo.list_views.return_value = [row(1, 3), row(4, 7)]
        ctx = PermissionContext(PermissionLevel.READ, frozenset({7, 3}))

        # === Act ===
        servers = query_service.list_servers(ctx)

        # === Assert ===
        mock_server_repo.list_views.assert_called_once_with([3, 7])
        assert servers[1] == {
            "hostId": 4,
            "benchName": "bench-4",
            "hostName": "pc-4",
            "benchType": None,
            "infoText": "",
            "status": "online",
            "activeUser": None,
            "platformId": 7,
            "platformName": "P7",
        }

# ===================================================================
#  get_server 테스트
# ===================================================================
class TestGetServer:
    def test_get_server_not_found(self, query_service, mock_server_repo):
        mock_server_repo.find_view.return_value = None

        with pytest.raises(HostNotFoundError):
            query_service.get_server(PermissionContext(PermissionLevel.ADMIN), 42)

    def test_get_server_outside_access_set(self, query_service, mock_server_repo):
        """접근 집합 밖의 플랫폼에 있는 서버는 조회할 수 없습니다."""
        mock_server_repo.find_view.return_value = row(5, 9)

        with pytest.raises(ForbiddenError) as exc_info:
            query_service.get_server(PermissionContext(PermissionLevel.READ, frozenset({7})), 5)
        assert exc_info.value.side == "current"

    def test_get_server_in_access_set(self, query_service, mock_server_repo):
        mock_server_repo.find_view.return_value = row(5, 7)

        server = query_service.get_server(PermissionContext(PermissionLevel.READ, frozenset({7})), 5)

        assert server["hostId"] == 5

    @pytest.mark.parametrize("ctx", [
        PermissionContext(),
        PermissionContext(PermissionLevel.READ, frozenset({7})),
        PermissionContext(PermissionLevel.EDIT, frozenset({7, 9})),
    ])
    def test_unclassified_server_hidden_from_non_admin(self, query_service, mock_server_repo, ctx):
        """플랫폼 없는 서버는 목록에 나오지 않으므로 단건 조회도 Admin만 가능합니다."""
        mock_server_repo.find_view.return_value = row(30, None)

        with pytest.raises(ForbiddenError) as exc_info:
            query_service.get_server(ctx, 30)
        assert exc_info.value.side == "current"

    def test_unclassified_server_visible_to_admin(self, query_service, mock_server_repo):
        mock_server_repo.find_view.return_value = row(30, None)

        assert query_service.get_server(PermissionContext(PermissionLevel.ADMIN), 30)["platformId"] is None

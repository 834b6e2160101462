from typing import Any, Dict, List

from src.repositories.interfaces import IServerRepository
from src.schemas.server import ServerView
from src.services.exceptions import ForbiddenError, HostNotFoundError
from src.services.permission_service import PermissionContext


class ServerQueryService:
    """호출자에게 보이는 서버 목록을 권한 컨텍스트에 따라 걸러서 제공합니다."""

    def __init__(self, server_repo: IServerRepository):
        self.server_repo = server_repo

    def list_servers(self, ctx: PermissionContext) -> List[Dict[str, Any]]:
        """
        서버 목록을 조회합니다.

        Admin은 전체 목록을, 그 외에는 접근 가능한 플랫폼에 분류된 서버만 받습니다.
        접근 가능한 플랫폼이 없으면 오류 없이 빈 목록을 반환합니다.
        """
        if ctx.is_admin:
            rows = self.server_repo.list_views()
        elif not ctx.accessible_platform_ids:
            return []
        else:
            rows = self.server_repo.list_views(sorted(ctx.accessible_platform_ids))
        return [ServerView.model_validate(row).to_dict() for row in rows]

    def get_server(self, ctx: PermissionContext, host_id: int) -> Dict[str, Any]:
        """
        서버 하나를 조회합니다. 목록에 보이는 서버만 조회할 수 있습니다.

        Raises:
            HostNotFoundError: 호스트가 없을 때.
            ForbiddenError: Admin이 아니고 호스트의 플랫폼이 접근 집합에 없을 때. (플랫폼 없음 포함)
        """
        view = self.server_repo.find_view(host_id)
        if view is None:
            raise HostNotFoundError(f"Server (host) with id '{host_id}' not found.")
        if not ctx.can_view(view["platform_id"]):
            raise ForbiddenError(f"Not allowed to view server '{host_id}'.", side="current")
        return ServerView.model_validate(view).to_dict()

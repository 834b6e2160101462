import logging
from typing import Any, Dict, Optional

from src.database import models
from src.repositories.interfaces import IServerRepository, IUnitOfWork
from src.schemas.base import parse_payload
from src.schemas.server import ServerCreateRequest, ServerUpdateRequest, ServerView
from src.services.exceptions import ForbiddenError, HostNotFoundError, ValidationError
from src.services.permission_service import PermissionContext
from src.services.platform_service import PlatformRegistry, normalize_platform_name
from src.utils.status import STATUS_OFFLINE, derive_status

logger = logging.getLogger(__name__)


class ServerService:
    """
    서버 집합체(Bench + Host + BenchPlatformLink)의 생성, 수정, 삭제를 담당합니다.

    권한 검사와 요청 검증은 트랜잭션을 열기 전에 끝내고,
    세 테이블에 대한 쓰기는 하나의 트랜잭션으로 묶어 부분적인 집합체가 남지 않게 합니다.
    """

    def __init__(self, server_repo: IServerRepository, platform_registry: PlatformRegistry, unit_of_work: IUnitOfWork):
        self.server_repo = server_repo
        self.platform_registry = platform_registry
        self.unit_of_work = unit_of_work

    def create_server(self, ctx: PermissionContext, payload: Any) -> Dict[str, Any]:
        """
        벤치, 호스트, 벤치-플랫폼 연결을 한 트랜잭션으로 생성합니다.

        Args:
            ctx: 호출자의 권한 컨텍스트.
            payload: benchName, hostName, platformName, infoText (필수),
                benchType, activeUser (선택)를 담은 요청 본문.

        Returns:
            생성된 서버의 조회 형태 (ServerView 딕셔너리).

        Raises:
            ForbiddenError: Admin/Edit가 아니거나 대상 플랫폼에 접근할 수 없을 때.
            ValidationError: 필수 필드가 없거나 비어 있을 때.
        """
        ctx.require_edit("create servers")
        request = parse_payload(ServerCreateRequest, payload)
        platform_name = normalize_platform_name(request.platform_name)
        self._authorize_target_platform(ctx, platform_name)

        with self.unit_of_work.atomic():
            platform_id = self.platform_registry.resolve_or_create(platform_name)
            bench = self.server_repo.create_bench(
                models.Bench(name=request.bench_name, bench_type=request.bench_type or None)
            )
            host = self.server_repo.create_host(
                models.Host(
                    bench_id=bench.id,
                    name=request.host_name,
                    info_text=request.info_text,
                    active_user=request.active_user or None,
                    status=derive_status(request.active_user),
                )
            )
            if platform_id is not None:
                self.server_repo.upsert_bench_platform(bench.id, platform_id)
            host_id, bench_id = host.id, bench.id

        logger.info("Created server host=%s bench=%s platform=%s.", host_id, bench_id, platform_id)
        return self._view(host_id)

    def update_server(self, ctx: PermissionContext, host_id: int, payload: Any) -> Dict[str, Any]:
        """
        호스트 필드, 벤치 유형, 플랫폼 분류를 한 트랜잭션으로 수정합니다.

        Admin이 아니면 호스트의 현재 플랫폼과 변경할 플랫폼 모두에 접근할 수 있어야 합니다.
        (각각 None이면 통과) 같은 내용으로 여러 번 수정해도 결과는 같습니다.

        Raises:
            ForbiddenError: 권한 레벨이 부족하거나, side='current' 또는 side='target' 검사에 실패했을 때.
            ValidationError: 요청 본문이 잘못되었거나, 벤치가 없는 호스트에 플랫폼을 지정했을 때.
            HostNotFoundError: 호스트가 없을 때.
        """
        ctx.require_edit("update servers")
        request = parse_payload(ServerUpdateRequest, payload)

        host = self.server_repo.find_host(host_id)
        if not host:
            raise HostNotFoundError(f"Server (host) with id '{host_id}' not found.")

        current_platform_id = self.server_repo.find_platform_id_for_bench(host.bench_id)
        if not ctx.can_access(current_platform_id):
            raise ForbiddenError(
                f"Not allowed to modify server '{host_id}' in its current platform.", side="current"
            )
        platform_name = normalize_platform_name(request.platform_name)
        if host.bench_id is None and platform_name is not None:
            raise ValidationError(
                f"Server '{host_id}' has no bench; it cannot be classified under platform '{platform_name}'."
            )
        self._authorize_target_platform(ctx, platform_name)

        if request.offline is None:
            offline = host.status == STATUS_OFFLINE
        else:
            offline = request.offline

        platform_id = None
        with self.unit_of_work.atomic():
            host.name = request.host_name
            host.info_text = request.info_text
            host.active_user = request.active_user or None
            host.status = derive_status(request.active_user, offline)
            self.server_repo.save_host(host)

            if host.bench_id is None:
                logger.warning("Server %s has no bench; skipping bench and platform updates.", host_id)
            else:
                platform_id = self.platform_registry.resolve_or_create(platform_name)
                bench = self.server_repo.find_bench(host.bench_id)
                if request.bench_name:
                    bench.name = request.bench_name
                bench.bench_type = request.bench_type or None
                self.server_repo.save_bench(bench)
                if platform_id is None:
                    self.server_repo.delete_bench_platform(bench.id)
                else:
                    self.server_repo.upsert_bench_platform(bench.id, platform_id)

        logger.info("Updated server host=%s platform %s -> %s.", host_id, current_platform_id, platform_id)
        return self._view(host_id)

    def delete_server(self, ctx: PermissionContext, host_id: int) -> bool:
        """
        호스트 행을 삭제합니다. 벤치와 플랫폼 분류는 다른 호스트나 기록을 위해 남겨둡니다.

        Raises:
            ForbiddenError: Admin이 아닐 때.
            HostNotFoundError: 호스트가 없을 때.
        """
        ctx.require_admin("delete servers")
        host = self.server_repo.find_host(host_id)
        if not host:
            raise HostNotFoundError(f"Server (host) with id '{host_id}' not found.")

        with self.unit_of_work.atomic():
            self.server_repo.delete_host(host)

        logger.info("Deleted server host=%s.", host_id)
        return True

    def _authorize_target_platform(self, ctx: PermissionContext, platform_name: Optional[str]):
        # 등록되지 않은 이름은 어떤 접근 집합에도 들어 있을 수 없으므로 만들지 않고 거부합니다.
        if ctx.is_admin or platform_name is None:
            return
        platform_id = self.platform_registry.find(platform_name)
        if platform_id is None or not ctx.can_access(platform_id):
            raise ForbiddenError(
                f"Not allowed to assign servers to platform '{platform_name}'.", side="target"
            )

    def _view(self, host_id: int) -> Dict[str, Any]:
        view = self.server_repo.find_view(host_id)
        if view is None:
            raise HostNotFoundError(f"Server (host) with id '{host_id}' not found.")
        return ServerView.model_validate(view).to_dict()

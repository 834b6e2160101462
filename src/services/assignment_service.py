import logging
from datetime import date
from typing import Any, Dict, List, Optional

from src.database import models
from src.repositories.interfaces import (
    IServerRepository, IVMRepository, ISoftwareRepository, ILicenseRepository, IUnitOfWork
)
from src.schemas.assignment import (
    SoftwareAssignRequest, LicenseAssignRequest,
    SoftwareAssignmentView, LicenseAssignmentView, HostLicenseView,
)
from src.schemas.base import parse_payload
from src.services.exceptions import (
    ValidationError, ForbiddenError, HostNotFoundError, VmNotFoundError,
    SoftwareNotFoundError, LicenseNotFoundError, AssignmentNotFoundError,
)
from src.services.permission_service import PermissionContext

logger = logging.getLogger(__name__)

TARGET_HOST = "host"
TARGET_VM = "vm"


class _TargetGuard:
    """할당 대상(호스트/VM)의 존재와 플랫폼 접근 권한을 확인합니다. VM은 플랫폼 범위가 없습니다."""

    def __init__(self, server_repo: IServerRepository, vm_repo: IVMRepository):
        self.server_repo = server_repo
        self.vm_repo = vm_repo

    def check(self, ctx: PermissionContext, target: str, target_id: int, side: str = "target", read_only: bool = False):
        # 조회는 서버 목록과 같은 규칙(can_view), 변경은 can_access를 따릅니다.
        if target == TARGET_HOST:
            host = self.server_repo.find_host(target_id)
            if not host:
                raise HostNotFoundError(f"Host with id '{target_id}' not found.")
            platform_id = self.server_repo.find_platform_id_for_bench(host.bench_id)
            allowed = ctx.can_view(platform_id) if read_only else ctx.can_access(platform_id)
            if not allowed:
                raise ForbiddenError(f"Not allowed to act on host '{target_id}'.", side=side)
        elif target == TARGET_VM:
            if not self.vm_repo.find_by_id(target_id):
                raise VmNotFoundError(f"VM with id '{target_id}' not found.")
        else:
            raise ValidationError(f"Unknown assignment target '{target}'.")


class SoftwareAssignmentService:
    """호스트/VM과 소프트웨어 카탈로그 사이의 다대다 할당을 관리합니다."""

    def __init__(self, software_repo: ISoftwareRepository, server_repo: IServerRepository,
                 vm_repo: IVMRepository, unit_of_work: IUnitOfWork):
        self.software_repo = software_repo
        self.guard = _TargetGuard(server_repo, vm_repo)
        self.unit_of_work = unit_of_work

    def list_software(self, ctx: PermissionContext, target: str, target_id: int) -> List[Dict[str, Any]]:
        """대상에 할당된 소프트웨어 목록을 조회합니다."""
        self.guard.check(ctx, target, target_id, side="current", read_only=True)
        rows = self.software_repo.list_assignments(target, target_id)
        return [SoftwareAssignmentView.model_validate(row).to_dict() for row in rows]

    def assign_software(self, ctx: PermissionContext, target: str, target_id: int, payload: Any) -> Dict[str, Any]:
        """
        소프트웨어를 대상에 할당합니다. 이미 할당되어 있으면 아무것도 바꾸지 않고 성공합니다.

        Returns:
            targetId, softwareId, created(이번 호출로 새로 생성되었는지)를 담은 딕셔너리.

        Raises:
            ForbiddenError: 권한 레벨이 부족하거나 호스트의 플랫폼에 접근할 수 없을 때.
            ValidationError: 요청 본문이 잘못되었을 때.
            NotFoundError: 대상이나 소프트웨어가 없을 때.
        """
        ctx.require_edit("assign software")
        request = parse_payload(SoftwareAssignRequest, payload)
        self.guard.check(ctx, target, target_id)
        if not self.software_repo.find_by_id(request.software_id):
            raise SoftwareNotFoundError(f"Software with id '{request.software_id}' not found.")

        install_date = request.install_date.isoformat() if request.install_date else None
        with self.unit_of_work.atomic():
            created = self.software_repo.insert_assignment_if_absent(
                target, target_id, request.software_id, install_date
            )

        if created:
            logger.info("Assigned software %s to %s %s.", request.software_id, target, target_id)
        return {"targetId": target_id, "softwareId": request.software_id, "created": created}

    def unassign_software(self, ctx: PermissionContext, target: str, target_id: int, software_id: int) -> bool:
        """
        소프트웨어 할당을 해제합니다.

        Raises:
            AssignmentNotFoundError: 해당 할당이 없을 때. (호출자 버그를 드러내기 위함)
        """
        ctx.require_edit("unassign software")
        self.guard.check(ctx, target, target_id, side="current")

        with self.unit_of_work.atomic():
            deleted = self.software_repo.delete_assignment(target, target_id, software_id)
        if deleted == 0:
            raise AssignmentNotFoundError(
                f"Software '{software_id}' is not assigned to {target} '{target_id}'."
            )

        logger.info("Unassigned software %s from %s %s.", software_id, target, target_id)
        return True


class LicenseAssignmentService:
    """라이선스를 호스트 또는 VM 하나에 배타적으로 할당합니다."""

    def __init__(self, license_repo: ILicenseRepository, server_repo: IServerRepository,
                 vm_repo: IVMRepository, unit_of_work: IUnitOfWork):
        self.license_repo = license_repo
        self.guard = _TargetGuard(server_repo, vm_repo)
        self.unit_of_work = unit_of_work

    def get_assignment(self, ctx: PermissionContext, license_id: int) -> Optional[Dict[str, Any]]:
        """라이선스의 현재 할당을 조회합니다. 할당이 없으면 None. 호스트에 할당되어 있으면 그 호스트를 볼 수 있어야 합니다."""
        self._get_license(license_id)
        assignment = self.license_repo.find_assignment(license_id)
        if assignment is None:
            return None
        if assignment.host_id is not None:
            self.guard.check(ctx, TARGET_HOST, assignment.host_id, side="current", read_only=True)
        return LicenseAssignmentView.model_validate(assignment).to_dict()

    def assign_license(self, ctx: PermissionContext, license_id: int, payload: Any) -> Dict[str, Any]:
        """
        라이선스를 호스트 또는 VM에 할당합니다.

        기존 할당이 있으면 같은 트랜잭션 안에서 먼저 지운 뒤 새로 기록하므로,
        어떤 시점에도 라이선스당 할당은 최대 하나입니다.
        기존 할당이 호스트에 있으면 그 호스트의 플랫폼에도 접근할 수 있어야 합니다.

        Raises:
            ValidationError: hostId와 vmId 중 정확히 하나가 주어지지 않았을 때.
            ForbiddenError: 권한 레벨 부족, 또는 기존/새 호스트의 플랫폼에 접근할 수 없을 때.
            NotFoundError: 라이선스나 대상이 없을 때.
        """
        ctx.require_edit("assign licenses")
        request = parse_payload(LicenseAssignRequest, payload)
        self._get_license(license_id)
        self._check_current_assignment(ctx, license_id)

        if request.host_id is not None:
            self.guard.check(ctx, TARGET_HOST, request.host_id)
        else:
            self.guard.check(ctx, TARGET_VM, request.vm_id)

        assigned_on = (request.assigned_on or date.today()).isoformat()
        with self.unit_of_work.atomic():
            self.license_repo.delete_assignments(license_id)
            self.license_repo.create_assignment(
                models.LicenseAssignment(
                    license_id=license_id,
                    host_id=request.host_id,
                    vm_id=request.vm_id,
                    assigned_on=assigned_on,
                )
            )

        logger.info("Assigned license %s to host=%s vm=%s.", license_id, request.host_id, request.vm_id)
        return {"licenseId": license_id, "hostId": request.host_id, "vmId": request.vm_id, "assignedOn": assigned_on}

    def unassign_license(self, ctx: PermissionContext, license_id: int) -> bool:
        """라이선스의 현재 할당을 대상 종류와 관계없이 해제합니다. 할당이 없어도 성공입니다."""
        ctx.require_edit("unassign licenses")
        self._get_license(license_id)
        self._check_current_assignment(ctx, license_id)

        with self.unit_of_work.atomic():
            deleted = self.license_repo.delete_assignments(license_id)

        logger.info("Unassigned license %s (%s row(s) removed).", license_id, deleted)
        return True

    def list_host_licenses(self, ctx: PermissionContext, host_id: int) -> List[Dict[str, Any]]:
        """호스트에 할당된 라이선스 목록을 조회합니다."""
        self.guard.check(ctx, TARGET_HOST, host_id, side="current", read_only=True)
        rows = self.license_repo.list_for_host(host_id)
        return [HostLicenseView.model_validate(row).to_dict() for row in rows]

    def _get_license(self, license_id: int) -> models.License:
        license_ = self.license_repo.find_by_id(license_id)
        if not license_:
            raise LicenseNotFoundError(f"License with id '{license_id}' not found.")
        return license_

    def _check_current_assignment(self, ctx: PermissionContext, license_id: int):
        current = self.license_repo.find_assignment(license_id)
        if current is not None and current.host_id is not None:
            self.guard.check(ctx, TARGET_HOST, current.host_id, side="current")

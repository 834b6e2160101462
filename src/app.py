# src/app.py
from wsgiref.simple_server import make_server
from functools import partial
import json
import logging
import re

from sqlalchemy.orm import sessionmaker

from src.config import Settings, get_settings
from src.database.database import build_engine, build_session_factory
from src.repositories.sqlalchemy import (
    SqlalchemyUnitOfWork,
    SqlalchemyUserRepository,
    SqlalchemyGroupRepository,
    SqlalchemyPermissionRepository,
    SqlalchemyPlatformRepository,
    SqlalchemyServerRepository,
    SqlalchemyVMRepository,
    SqlalchemySoftwareRepository,
    SqlalchemyLicenseRepository,
)
from src.services.admin_service import AdminService
from src.services.assignment_service import (
    SoftwareAssignmentService, LicenseAssignmentService, TARGET_HOST, TARGET_VM
)
from src.services.permission_service import PermissionResolver, PermissionContext
from src.services.platform_service import PlatformRegistry
from src.services.server_query_service import ServerQueryService
from src.services.server_service import ServerService
from src.services.exceptions import (
    AuthenticationError, ValidationError, NotFoundError, ForbiddenError, ConflictError,
)
from src.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# --------------------------------------------------------------------------
## 요청 처리 유틸리티 함수
# --------------------------------------------------------------------------

def get_request_data(environ):
    try:
        content_length = int(environ.get("CONTENT_LENGTH") or 0)
        return json.loads(environ["wsgi.input"].read(content_length)) if content_length > 0 else {}
    except (ValueError, json.JSONDecodeError):
        raise ValidationError("Invalid or missing JSON body.")

def get_caller_permission(environ) -> PermissionContext:
    """업스트림 인증 프록시가 넘겨준 사용자 ID로 호출자의 권한 컨텍스트를 계산합니다."""
    raw_user_id = environ.get(environ['settings'].user_id_header)
    if not raw_user_id:
        raise AuthenticationError("Unauthorized: no authenticated user.")
    try:
        user_id = int(raw_user_id)
    except ValueError:
        raise ValidationError("Invalid user ID format.")
    return environ['services']['permission'].resolve(user_id)

ERROR_STATUS = {
    AuthenticationError: "401 Unauthorized",
    ValidationError: "400 Bad Request",
    ForbiddenError: "403 Forbidden",
    NotFoundError: "404 Not Found",
    ConflictError: "409 Conflict",
}

def handle_exception(e):
    # 하위 클래스(HostNotFoundError 등)는 MRO를 따라 상위 분류의 상태 코드를 사용합니다.
    for cls in type(e).__mro__:
        if cls in ERROR_STATUS:
            body = {"error": str(e)}
            if isinstance(e, ForbiddenError) and e.side:
                body["side"] = e.side
            return ERROR_STATUS[cls], json.dumps(body)
    logger.exception("Unhandled error while processing request")
    return "500 Internal Server Error", json.dumps({"error": "Internal server error."})

# --------------------------------------------------------------------------
## WSGI 애플리케이션 (의존성 주입 및 라우팅)
# --------------------------------------------------------------------------

def build_services(db_session):
    """요청 하나에 쓰일 리포지토리와 서비스를 같은 세션으로 묶어 생성합니다."""
    unit_of_work = SqlalchemyUnitOfWork(db_session)
    user_repo = SqlalchemyUserRepository(db_session)
    group_repo = SqlalchemyGroupRepository(db_session)
    permission_repo = SqlalchemyPermissionRepository(db_session)
    platform_repo = SqlalchemyPlatformRepository(db_session)
    server_repo = SqlalchemyServerRepository(db_session)
    vm_repo = SqlalchemyVMRepository(db_session)
    software_repo = SqlalchemySoftwareRepository(db_session)
    license_repo = SqlalchemyLicenseRepository(db_session)

    platform_registry = PlatformRegistry(platform_repo)
    return {
        'permission': PermissionResolver(user_repo, group_repo),
        'platforms': platform_registry,
        'servers': ServerService(server_repo, platform_registry, unit_of_work),
        'server_query': ServerQueryService(server_repo),
        'software': SoftwareAssignmentService(software_repo, server_repo, vm_repo, unit_of_work),
        'licenses': LicenseAssignmentService(license_repo, server_repo, vm_repo, unit_of_work),
        'admin': AdminService(user_repo, group_repo, permission_repo, platform_repo, unit_of_work),
    }

def create_app(session_factory: sessionmaker, settings: Settings):
    """세션 팩토리와 설정을 주입받아 WSGI 애플리케이션을 만듭니다."""

    def application(environ, start_response):
        db_session = session_factory()
        try:
            # 1. 의존성 생성 (Repositories -> Services) 후 environ을 통해 핸들러에 전달
            environ['settings'] = settings
            environ['services'] = build_services(db_session)

            # 2. 라우팅 및 핸들러 실행
            path = environ.get("PATH_INFO", "")
            method = environ.get("REQUEST_METHOD", "")

            handler, path_args = None, []
            for route_method, pattern, route_handler in ROUTES:
                if method == route_method and (match := re.match(pattern, path)):
                    handler, path_args = route_handler, match.groups()
                    break

            if handler:
                status, response_body = handler(environ, *path_args)
            else:
                status, response_body = '404 Not Found', json.dumps({'error': 'Not Found'})

        except Exception as e:
            db_session.rollback()
            status, response_body = handle_exception(e)
        finally:
            db_session.close()

        start_response(status, [("Content-Type", "application/json")])
        return [response_body.encode("utf-8")]

    return application

# --------------------------------------------------------------------------
## 핸들러 함수
# --------------------------------------------------------------------------

def list_servers_handler(environ, *args):
    ctx = get_caller_permission(environ)
    servers = environ['services']['server_query'].list_servers(ctx)
    return '200 OK', json.dumps(servers)

def get_server_handler(environ, host_id):
    ctx = get_caller_permission(environ)
    server = environ['services']['server_query'].get_server(ctx, int(host_id))
    return '200 OK', json.dumps(server)

def create_server_handler(environ, *args):
    ctx = get_caller_permission(environ)
    data = get_request_data(environ)
    server = environ['services']['servers'].create_server(ctx, data)
    return '201 Created', json.dumps(server)

def update_server_handler(environ, host_id):
    ctx = get_caller_permission(environ)
    data = get_request_data(environ)
    server = environ['services']['servers'].update_server(ctx, int(host_id), data)
    return '200 OK', json.dumps(server)

def delete_server_handler(environ, host_id):
    ctx = get_caller_permission(environ)
    environ['services']['servers'].delete_server(ctx, int(host_id))
    return '200 OK', json.dumps({"message": f"Server (host) with ID {host_id} deleted successfully."})

def permission_handler(environ, *args):
    ctx = get_caller_permission(environ)
    return '200 OK', json.dumps({"permissionName": ctx.permission_name})

def list_platforms_handler(environ, *args):
    get_caller_permission(environ)
    platforms = environ['services']['platforms'].list_platforms()
    return '200 OK', json.dumps({"platforms": platforms})

def list_software_handler(target, environ, target_id):
    ctx = get_caller_permission(environ)
    assignments = environ['services']['software'].list_software(ctx, target, int(target_id))
    return '200 OK', json.dumps({"softwareAssignments": assignments})

def assign_software_handler(target, environ, target_id):
    ctx = get_caller_permission(environ)
    data = get_request_data(environ)
    result = environ['services']['software'].assign_software(ctx, target, int(target_id), data)
    return ('201 Created' if result["created"] else '200 OK'), json.dumps(result)

def unassign_software_handler(target, environ, target_id, software_id):
    ctx = get_caller_permission(environ)
    environ['services']['software'].unassign_software(ctx, target, int(target_id), int(software_id))
    return '200 OK', json.dumps({"message": "Software unassigned successfully."})

def get_license_assignment_handler(environ, license_id):
    ctx = get_caller_permission(environ)
    assignment = environ['services']['licenses'].get_assignment(ctx, int(license_id))
    return '200 OK', json.dumps({"assignment": assignment})

def assign_license_handler(environ, license_id):
    ctx = get_caller_permission(environ)
    data = get_request_data(environ)
    assignment = environ['services']['licenses'].assign_license(ctx, int(license_id), data)
    return '201 Created', json.dumps({"assignment": assignment})

def unassign_license_handler(environ, license_id):
    ctx = get_caller_permission(environ)
    environ['services']['licenses'].unassign_license(ctx, int(license_id))
    return '200 OK', json.dumps({"message": "License assignment removed successfully."})

def list_host_licenses_handler(environ, host_id):
    ctx = get_caller_permission(environ)
    licenses = environ['services']['licenses'].list_host_licenses(ctx, int(host_id))
    return '200 OK', json.dumps({"assignedLicenses": licenses})

def list_groups_handler(environ, *args):
    ctx = get_caller_permission(environ)
    return '200 OK', json.dumps({"groups": environ['services']['admin'].list_groups(ctx)})

def create_group_handler(environ, *args):
    ctx = get_caller_permission(environ)
    data = get_request_data(environ)
    group = environ['services']['admin'].create_group(ctx, data)
    return '201 Created', json.dumps(group)

def set_group_permission_handler(environ, group_id):
    ctx = get_caller_permission(environ)
    data = get_request_data(environ)
    environ['services']['admin'].set_group_permission(ctx, int(group_id), data)
    return '204 No Content', ''

def set_group_platforms_handler(environ, group_id):
    ctx = get_caller_permission(environ)
    data = get_request_data(environ)
    environ['services']['admin'].set_group_platforms(ctx, int(group_id), data)
    return '204 No Content', ''

def list_users_handler(environ, *args):
    ctx = get_caller_permission(environ)
    return '200 OK', json.dumps({"users": environ['services']['admin'].list_users(ctx)})

def set_user_group_handler(environ, user_id):
    ctx = get_caller_permission(environ)
    data = get_request_data(environ)
    result = environ['services']['admin'].set_user_group(ctx, int(user_id), data)
    return '200 OK', json.dumps(result)

def list_permissions_handler(environ, *args):
    ctx = get_caller_permission(environ)
    return '200 OK', json.dumps({"permissions": environ['services']['admin'].list_permissions(ctx)})

ROUTES = [
    ('GET', r'^/servers$', list_servers_handler),
    ('POST', r'^/servers$', create_server_handler),
    ('GET', r'^/servers/([0-9]+)$', get_server_handler),
    ('PUT', r'^/servers/([0-9]+)$', update_server_handler),
    ('DELETE', r'^/servers/([0-9]+)$', delete_server_handler),
    ('GET', r'^/permission$', permission_handler),
    ('GET', r'^/platforms$', list_platforms_handler),
    ('GET', r'^/hosts/([0-9]+)/software$', partial(list_software_handler, TARGET_HOST)),
    ('POST', r'^/hosts/([0-9]+)/software$', partial(assign_software_handler, TARGET_HOST)),
    ('DELETE', r'^/hosts/([0-9]+)/software/([0-9]+)$', partial(unassign_software_handler, TARGET_HOST)),
    ('GET', r'^/vms/([0-9]+)/software$', partial(list_software_handler, TARGET_VM)),
    ('POST', r'^/vms/([0-9]+)/software$', partial(assign_software_handler, TARGET_VM)),
    ('DELETE', r'^/vms/([0-9]+)/software/([0-9]+)$', partial(unassign_software_handler, TARGET_VM)),
    ('GET', r'^/hosts/([0-9]+)/licenses$', list_host_licenses_handler),
    ('GET', r'^/licenses/([0-9]+)/assignment$', get_license_assignment_handler),
    ('POST', r'^/licenses/([0-9]+)/assignment$', assign_license_handler),
    ('DELETE', r'^/licenses/([0-9]+)/assignment$', unassign_license_handler),
    ('GET', r'^/admin/groups$', list_groups_handler),
    ('POST', r'^/admin/groups$', create_group_handler),
    ('PUT', r'^/admin/groups/([0-9]+)/permission$', set_group_permission_handler),
    ('PUT', r'^/admin/groups/([0-9]+)/platforms$', set_group_platforms_handler),
    ('GET', r'^/admin/users$', list_users_handler),
    ('PUT', r'^/admin/users/([0-9]+)/group$', set_user_group_handler),
    ('GET', r'^/admin/permissions$', list_permissions_handler),
]

# --------------------------------------------------------------------------
## 서버 실행
# --------------------------------------------------------------------------

def main():
    settings = get_settings()
    setup_logging(settings.log_level)
    engine = build_engine(settings.database_url, echo=settings.database_echo)
    application = create_app(build_session_factory(engine), settings)
    try:
        with make_server(settings.host, settings.port, application) as httpd:
            logger.info("Serving bench inventory API on port %s...", settings.port)
            httpd.serve_forever()
    finally:
        engine.dispose()

if __name__ == "__main__":
    main()

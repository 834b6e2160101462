# src/services/exceptions.py

# --- Validation ---
class ValidationError(Exception):
    """요청 값이 없거나 형식이 잘못되었을 때 (저장소에 도달하기 전)"""
    pass

# --- Not Found ---
class NotFoundError(Exception):
    """참조한 엔티티가 존재하지 않을 때"""
    pass

class HostNotFoundError(NotFoundError):
    """호스트를 찾을 수 없을 때"""
    pass

class VmNotFoundError(NotFoundError):
    """VM을 찾을 수 없을 때"""
    pass

class SoftwareNotFoundError(NotFoundError):
    """소프트웨어를 찾을 수 없을 때"""
    pass

class LicenseNotFoundError(NotFoundError):
    """라이선스를 찾을 수 없을 때"""
    pass

class UserNotFoundError(NotFoundError):
    """사용자를 찾을 수 없을 때"""
    pass

class GroupNotFoundError(NotFoundError):
    """그룹을 찾을 수 없을 때"""
    pass

class PlatformNotFoundError(NotFoundError):
    """플랫폼 ID를 찾을 수 없을 때"""
    pass

class AssignmentNotFoundError(NotFoundError):
    """해제하려는 할당이 존재하지 않을 때"""
    pass

# --- Authorization ---
class ForbiddenError(Exception):
    """
    권한 부족. 변경을 시작하기 전에 항상 검사됩니다.

    side는 어떤 플랫폼 검사에서 실패했는지를 나타냅니다:
    'current'(리소스의 현재 플랫폼), 'target'(변경하려는 플랫폼), 또는 None(권한 레벨 부족).
    """
    def __init__(self, message: str, side: str = None):
        super().__init__(message)
        self.side = side

class AuthenticationError(Exception):
    """요청에 인증된 사용자 정보가 없을 때"""
    pass

# --- Store ---
class ConflictError(Exception):
    """저장소의 참조 무결성/유일성 위반 (예: 잘못된 외래 키)"""
    pass

class InternalError(Exception):
    """예상하지 못한 내부 오류"""
    pass

# src/utils/status.py
from typing import Optional

STATUS_ONLINE = "online"
STATUS_OFFLINE = "offline"
STATUS_IN_USE = "in_use"


def derive_status(active_user: Optional[str], offline: bool = False) -> str:
    """
    호스트의 상태를 활성 사용자 값과 오프라인 강제 여부만으로 계산합니다.

    호스트를 쓰는 모든 경로(생성, 수정)는 이 함수를 통해 상태를 정해야 합니다.

    Args:
        active_user: 현재 호스트를 사용 중인 사용자 이름 (자유 텍스트).
        offline: 관리자가 오프라인으로 강제했는지 여부.

    Returns:
        'offline', 'in_use', 'online' 중 하나.
    """
    if offline:
        return STATUS_OFFLINE
    if active_user and active_user.strip():
        return STATUS_IN_USE
    return STATUS_ONLINE

from typing import Optional

from pydantic import Field

from src.schemas.base import RequestModel, ResponseModel


class ServerCreateRequest(RequestModel):
    bench_name: str = Field(min_length=1)
    host_name: str = Field(min_length=1)
    # 키는 필수. 빈 문자열이나 null은 '플랫폼 없음'을 뜻합니다.
    platform_name: Optional[str]
    bench_type: Optional[str] = None
    info_text: str = Field(min_length=1)
    active_user: Optional[str] = None


class ServerUpdateRequest(RequestModel):
    # 생략하면 기존 벤치 이름을 유지합니다.
    bench_name: Optional[str] = Field(default=None, min_length=1)
    host_name: str = Field(min_length=1)
    platform_name: Optional[str]
    bench_type: Optional[str] = None
    info_text: str = Field(min_length=1)
    active_user: Optional[str] = None
    # None이면 기존 오프라인 강제 여부를 유지합니다.
    offline: Optional[bool] = None


class ServerView(ResponseModel):
    """목록/생성/수정이 공통으로 반환하는 평탄화된 서버 레코드."""
    host_id: int
    bench_name: Optional[str] = None
    host_name: str
    bench_type: Optional[str] = None
    info_text: Optional[str] = None
    status: str
    active_user: Optional[str] = None
    platform_id: Optional[int] = None
    platform_name: Optional[str] = None

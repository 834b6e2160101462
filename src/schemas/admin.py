from typing import List, Optional

from pydantic import Field, StrictInt

from src.schemas.base import RequestModel, ResponseModel


class GroupCreateRequest(RequestModel):
    name: str = Field(min_length=1)
    permission_name: str = Field(min_length=1)


class GroupPermissionRequest(RequestModel):
    permission_name: str = Field(min_length=1)


class GroupPlatformsRequest(RequestModel):
    platform_ids: List[StrictInt]


class UserGroupRequest(RequestModel):
    # 키는 필수. null이면 그룹에서 제외합니다.
    user_group_id: Optional[StrictInt]


class GroupView(ResponseModel):
    id: int
    name: str
    permission_name: Optional[str] = None
    platform_ids: List[int] = []


class UserView(ResponseModel):
    id: int
    display_name: str
    company_username: Optional[str] = None
    email: str
    user_group_id: Optional[int] = None
    user_group_name: Optional[str] = None


class PlatformView(ResponseModel):
    id: int
    name: str


class PermissionView(ResponseModel):
    id: int
    name: str

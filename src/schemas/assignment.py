from datetime import date
from typing import Optional

from pydantic import Field, StrictInt, model_validator

from src.schemas.base import RequestModel, ResponseModel


class SoftwareAssignRequest(RequestModel):
    software_id: StrictInt = Field(gt=0)
    install_date: Optional[date] = None


class LicenseAssignRequest(RequestModel):
    host_id: Optional[StrictInt] = None
    vm_id: Optional[StrictInt] = None
    assigned_on: Optional[date] = None

    @model_validator(mode="after")
    def check_single_target(self):
        if (self.host_id is None) == (self.vm_id is None):
            raise ValueError("Assignment must have either a hostId or a vmId, but not both.")
        return self


class SoftwareAssignmentView(ResponseModel):
    software_id: int
    software_name: Optional[str] = None
    major_version: Optional[str] = None
    vendor: Optional[str] = None
    install_date: Optional[str] = None


class LicenseAssignmentView(ResponseModel):
    license_id: int
    host_id: Optional[int] = None
    vm_id: Optional[int] = None
    assigned_on: Optional[str] = None


class HostLicenseView(ResponseModel):
    license_id: int
    license_name: Optional[str] = None
    license_type: Optional[str] = None
    software_name: str
    major_version: Optional[str] = None
    assigned_on: Optional[str] = None

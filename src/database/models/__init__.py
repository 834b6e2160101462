from .permission import Permission
from .group import UserGroup
from .user import User
from .platform import Platform
from .association import GroupPlatformAccess, HostSoftware, VmSoftware
from .bench import Bench, BenchPlatformLink
from .host import Host
from .vm import VM
from .software import Software
from .license import License, LicenseAssignment

__all__ = [
    "Permission", "UserGroup", "User", "Platform", "GroupPlatformAccess",
    "HostSoftware", "VmSoftware", "Bench", "BenchPlatformLink", "Host",
    "VM", "Software", "License", "LicenseAssignment",
]

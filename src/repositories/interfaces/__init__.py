from .unit_of_work import IUnitOfWork
from .user import IUserRepository
from .group import IGroupRepository
from .permission import IPermissionRepository
from .platform import IPlatformRepository
from .server import IServerRepository
from .vm import IVMRepository
from .software import ISoftwareRepository
from .license import ILicenseRepository

__all__ = [
    "IUnitOfWork", "IUserRepository", "IGroupRepository", "IPermissionRepository",
    "IPlatformRepository", "IServerRepository", "IVMRepository",
    "ISoftwareRepository", "ILicenseRepository",
]

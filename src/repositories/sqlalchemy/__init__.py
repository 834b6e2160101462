from .sqlalchemy_unit_of_work import SqlalchemyUnitOfWork
from .sqlalchemy_user_repository import SqlalchemyUserRepository
from .sqlalchemy_group_repository import SqlalchemyGroupRepository
from .sqlalchemy_permission_repository import SqlalchemyPermissionRepository
from .sqlalchemy_platform_repository import SqlalchemyPlatformRepository
from .sqlalchemy_server_repository import SqlalchemyServerRepository
from .sqlalchemy_vm_repository import SqlalchemyVMRepository
from .sqlalchemy_software_repository import SqlalchemySoftwareRepository
from .sqlalchemy_license_repository import SqlalchemyLicenseRepository

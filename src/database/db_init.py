import logging

from sqlalchemy.engine import Engine

from .database import Base, build_engine, build_session_factory
from .models import *
from src.config import get_settings
from src.utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

PERMISSION_NAMES = ("Admin", "Edit", "Read", "Default")

def initialize_db(engine: Engine, admin_email: str = "admin@example.com"):
    """
    DB와 테이블을 생성하고, 기본 데이터를 삽입합니다.
    권한 레벨 4종, Admin 권한을 가진 'Administrators' 그룹, 그 그룹에 속한 관리자 사용자를 만듭니다.
    """
    logger.info("Initializing database schema...")

    # 모든 테이블을 생성합니다. (이미 존재하면 생성하지 않음)
    Base.metadata.create_all(bind=engine)

    db = build_session_factory(engine)()
    try:
        # 기본 데이터가 이미 있는지 확인
        if db.query(Permission).first():
            logger.info("Seed data already present; skipping.")
            return

        permissions = {name: Permission(name=name) for name in PERMISSION_NAMES}
        db.add_all(permissions.values())
        db.flush()

        admin_group = UserGroup(name="Administrators", permission_id=permissions["Admin"].id)
        db.add(admin_group)
        db.flush()

        db.add(User(display_name="Administrator", email=admin_email, user_group_id=admin_group.id))
        db.commit()
        logger.info("Database initialized with default permissions, group and admin user.")

    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def main():
    settings = get_settings()
    setup_logging(settings.log_level)
    initialize_db(build_engine(settings.database_url))

if __name__ == '__main__':
    main()

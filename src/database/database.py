from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

# 모든 모델 클래스가 상속받을 Base 클래스
Base = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite는 연결마다 외래 키 검사를 켜야 합니다.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    데이터베이스 URL로 SQLAlchemy 엔진을 생성합니다.

    엔진의 수명은 프로세스 진입점(app.py의 main)이 관리하며,
    각 컴포넌트는 세션을 주입받아 사용합니다.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        # SQLite 연결을 여러 스레드(요청)에서 사용할 수 있도록 허용
        connect_args["check_same_thread"] = False

    engine = create_engine(database_url, echo=echo, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    # autocommit=False, autoflush=False: 커밋은 Unit of Work가 명시적으로 수행합니다.
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

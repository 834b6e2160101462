from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    애플리케이션 설정을 환경 변수(BENCH_ 접두사) 또는 .env 파일에서 읽어옵니다.
    """

    database_url: str = "sqlite:///bench_inventory.db"
    database_echo: bool = False

    host: str = ""
    port: int = 8000

    # 업스트림 인증 프록시가 넣어주는 사용자 ID 헤더 (WSGI environ 키)
    user_id_header: str = "HTTP_X_USER_ID"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="BENCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()

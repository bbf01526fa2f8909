# backend/app/core/config.py

import os
from dotenv import load_dotenv

# .env 파일에서 환경 변수 로드
load_dotenv()


def _split_csv(value: str) -> list:
    return [item.strip() for item in value.split(",") if item.strip()]


class Settings:
    """애플리케이션 전역 설정 (환경 변수 기반)"""

    # 비동기 드라이버가 포함된 SQLAlchemy URL 이어야 합니다. (예: sqlite+aiosqlite, postgresql+asyncpg)
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./blog.db")
    SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"

    # 토큰 서명 키. 운영 환경에서는 반드시 .env 로 덮어써야 합니다.
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "change-me")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    CORS_ORIGINS = _split_csv(os.getenv("CORS_ORIGINS", "http://localhost:3000"))

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_DIR = os.getenv("LOG_DIR", "logs")


settings = Settings()

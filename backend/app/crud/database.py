from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import StaticPool

from backend.app.core.config import settings
from backend.app.crud.models.models import Base  # Base를 반드시 import해야 합니다!


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite 는 연결마다 FK 제약(ON DELETE CASCADE)을 켜줘야 함
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False):
    """URL 에 맞는 비동기 엔진 생성 (SQLite 일 때 FK 활성화 및 인메모리 풀 처리)"""
    kwargs = {"echo": echo}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        # 인메모리 DB 는 연결이 끊기면 사라지므로 단일 연결을 공유
        if database_url.rstrip("/").endswith(("sqlite+aiosqlite:", ":memory:")):
            kwargs["poolclass"] = StaticPool

    async_engine = create_async_engine(database_url, **kwargs)
    if is_sqlite:
        event.listen(async_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return async_engine


def build_sessionmaker(async_engine):
    return async_sessionmaker(
        bind=async_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


# 비동기 엔진 생성
engine = build_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)

# 비동기 세션 설정
AsyncSessionLocal = build_sessionmaker(engine)


# Dependency로 사용할 세션 생성
async def get_db():
    async with AsyncSessionLocal() as session:
        yield session


# 테이블 생성 함수
async def create_tables(async_engine=None):
    async with (async_engine or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

import os
import tempfile

# 앱 import 전에 설정을 고정 (모듈 로드 시 settings 가 읽힘)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "blog-backend-test-logs"))

import httpx
import pytest
import pytest_asyncio

from main import app
from backend.app.api.dependencies import require_auth
from backend.app.core.security import create_access_token
from backend.app.crud.database import build_engine, build_sessionmaker, create_tables, get_db
from backend.app.crud.models.models import User
from backend.app.crud.utils.schemas import AuthUser


@pytest_asyncio.fixture
async def engine():
    test_engine = build_engine("sqlite+aiosqlite://")
    await create_tables(test_engine)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return build_sessionmaker(engine)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def _add_user(session_factory, user_id: int, nickname: str) -> User:
    async with session_factory() as session:
        user = User(userId=user_id, nickname=nickname)
        session.add(user)
        await session.commit()
        return user


@pytest_asyncio.fixture
async def author(session_factory):
    return await _add_user(session_factory, 7, "u7")


@pytest_asyncio.fixture
async def other(session_factory):
    return await _add_user(session_factory, 8, "u8")


def auth_header(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def author_headers(author):
    return auth_header(author.userId)


@pytest.fixture
def other_headers(other):
    return auth_header(other.userId)


@pytest_asyncio.fixture
async def broken_client():
    """테이블이 없는 DB 에 연결된 클라이언트 (인증은 통과시킴)"""
    broken_engine = build_engine("sqlite+aiosqlite://")
    factory = build_sessionmaker(broken_engine)

    async def override_get_db():
        async with factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[require_auth] = lambda: AuthUser(userId=7, nickname="u7")
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
    await broken_engine.dispose()

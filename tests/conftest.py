"""
测试公共夹具

- 每个测试使用独立的内存 SQLite 数据库
- 通过 httpx.AsyncClient + ASGITransport 调用接口
- 两个用户（alice / bob）用于验证数据隔离
"""

import os

# 在导入 bizdash 之前设置，避免写日志文件和本地数据库
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("DATABASE_URI", "sqlite+aiosqlite://")

from datetime import date  # noqa: E402

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from bizdash.core.config import settings  # noqa: E402
from bizdash.core.deps import get_db, get_today  # noqa: E402
from bizdash.core.notifications import NotificationCenter  # noqa: E402
from bizdash.db.init_db import ensure_tables_exist  # noqa: E402
from bizdash.db.session import create_engine, create_session_factory  # noqa: E402
from bizdash.main import app  # noqa: E402
from bizdash.models.user import User  # noqa: E402

TODAY = date(2026, 10, 17)
ALICE_TOKEN = "alice-token"
BOB_TOKEN = "bob-token"


def auth(token: str = ALICE_TOKEN) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def engine():
    engine = create_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await ensure_tables_exist(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    factory = create_session_factory(engine)
    async with factory() as db:
        db.add_all([
            User(username="alice", api_token=ALICE_TOKEN),
            User(username="bob", api_token=BOB_TOKEN),
            User(username="carol", api_token="carol-token", is_active=False),
        ])
        await db.commit()
    return factory


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def notifications():
    center = NotificationCenter(settings.NOTIFICATION_INBOX_SIZE)
    app.state.notifications = center
    return center


@pytest_asyncio.fixture
async def client(session_factory, notifications):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_today] = lambda: TODAY
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def strict_numbers(monkeypatch):
    monkeypatch.setattr(settings, "STRICT_NUMBERS", True)

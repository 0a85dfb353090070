from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from bizdash.core.config import settings


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite 默认不检查外键，级联删除依赖它"""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_engine(url: str, **kwargs) -> AsyncEngine:
    engine = create_async_engine(url, echo=settings.SQL_DEBUG, future=True, **kwargs)
    enable_sqlite_foreign_keys(engine)
    return engine


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=bind,
        autoflush=False,
        expire_on_commit=False,
    )


# 创建异步引擎
engine = create_engine(settings.DATABASE_URI)

# 创建异步会话
SessionLocal = create_session_factory(engine)

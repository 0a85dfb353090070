import asyncio

from sqlalchemy.ext.asyncio import AsyncEngine

from bizdash.db.base import Base
from bizdash.db.session import engine as default_engine

# 导入所有模型，确保表能被创建
import bizdash.models  # noqa: F401


async def ensure_tables_exist(engine: AsyncEngine = default_engine) -> None:
    """
    确保数据库表存在（应用启动时调用）
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


if __name__ == "__main__":
    asyncio.run(ensure_tables_exist())

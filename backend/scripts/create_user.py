"""
创建登录用户并打印访问令牌

用法:
    python scripts/create_user.py <username>
"""

import asyncio
import os
import secrets
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select  # noqa: E402

from bizdash.db.init_db import ensure_tables_exist  # noqa: E402
from bizdash.db.session import SessionLocal  # noqa: E402
from bizdash.models.user import User  # noqa: E402


async def create_user(username: str) -> str:
    await ensure_tables_exist()
    async with SessionLocal() as db:
        existing = (await db.execute(select(User).where(User.username == username))).scalar_one_or_none()
        if existing:
            # 已存在则重置令牌
            existing.api_token = secrets.token_urlsafe(32)
            existing.is_active = True
            await db.commit()
            return existing.api_token

        user = User(username=username, api_token=secrets.token_urlsafe(32))
        db.add(user)
        await db.commit()
        return user.api_token


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    token = asyncio.run(create_user(sys.argv[1]))
    print(f"用户 {sys.argv[1]} 的访问令牌: {token}")

"""依赖注入 - 数据库会话、当前用户、通知"""
from datetime import date
from typing import AsyncGenerator, Optional

from fastapi import Depends, Header, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.core.config import settings
from bizdash.core.exceptions import AuthenticationError
from bizdash.core.notifications import NotificationCenter, Notifier
from bizdash.db import session as db_session
from bizdash.models.user import User


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    获取数据库会话依赖
    """
    async with db_session.SessionLocal() as session:
        yield session


def redirect_to(path: str) -> AuthenticationError:
    """未登录：构造带跳转地址的认证异常"""
    return AuthenticationError("Please log in to continue.", redirect_to=path)


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
    authorization: Optional[str] = Header(None),
) -> User:
    """根据 Authorization: Bearer <token> 获取当前用户"""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise redirect_to(settings.LOGIN_PATH)

    result = await db.execute(
        select(User).where(User.api_token == token.strip(), User.is_active.is_(True))
    )
    user = result.scalar_one_or_none()
    if user is None:
        raise redirect_to(settings.LOGIN_PATH)

    # 异常处理器需要知道通知发给谁
    request.state.user_id = user.id
    return user


def get_notification_center(request: Request) -> NotificationCenter:
    return request.app.state.notifications


def get_notifier(
    user: User = Depends(get_current_user),
    center: NotificationCenter = Depends(get_notification_center),
) -> Notifier:
    return center.for_user(user.id)


def get_today() -> date:
    """当前日期（测试时可以覆盖）"""
    return date.today()

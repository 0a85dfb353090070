"""通知API - 前端轮询获取提示消息"""

from typing import Any

from fastapi import APIRouter, Depends, Query

from bizdash.core.deps import get_current_user, get_notification_center
from bizdash.core.notifications import NotificationCenter
from bizdash.models.user import User
from bizdash.schemas.notification import NotificationListResponse, NotificationResponse

router = APIRouter()


@router.get("/", response_model=NotificationListResponse)
async def list_notifications(
    *,
    user: User = Depends(get_current_user),
    center: NotificationCenter = Depends(get_notification_center),
    keep: bool = Query(False, description="只查看，不清空"),
) -> Any:
    """获取通知，默认取出后清空"""
    items = center.peek(user.id) if keep else center.drain(user.id)
    return NotificationListResponse(data=[NotificationResponse.model_validate(n) for n in items])

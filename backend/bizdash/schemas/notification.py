from datetime import datetime
from typing import List

from pydantic import BaseModel


class NotificationResponse(BaseModel):
    level: str
    title: str
    detail: str = ""
    created_at: datetime

    class Config:
        from_attributes = True


class NotificationListResponse(BaseModel):
    data: List[NotificationResponse]

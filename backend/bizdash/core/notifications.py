"""
通知 - 对应前端的 toast 提示

每个用户一个有界收件箱，通知同时写日志。
发送方不关心返回值（fire-and-forget）。
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, Dict, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: str  # success / error
    title: str
    detail: str
    created_at: datetime = field(default_factory=datetime.utcnow)


class Notifier:
    """单个用户的通知发送器"""

    def __init__(self, user_id: int, inbox: Deque[Notification]):
        self.user_id = user_id
        self._inbox = inbox

    def success(self, title: str, detail: str = "") -> None:
        logger.info(f"[user {self.user_id}] {title}: {detail}")
        self._inbox.append(Notification("success", title, detail))

    def error(self, title: str, detail: str = "") -> None:
        logger.warning(f"[user {self.user_id}] {title}: {detail}")
        self._inbox.append(Notification("error", title, detail))


class NotificationCenter:
    """按用户保存最近的通知"""

    def __init__(self, inbox_size: int = 50):
        self.inbox_size = inbox_size
        self._inboxes: Dict[int, Deque[Notification]] = {}

    def _inbox(self, user_id: int) -> Deque[Notification]:
        if user_id not in self._inboxes:
            self._inboxes[user_id] = deque(maxlen=self.inbox_size)
        return self._inboxes[user_id]

    def for_user(self, user_id: int) -> Notifier:
        return Notifier(user_id, self._inbox(user_id))

    def peek(self, user_id: int) -> List[Notification]:
        return list(self._inbox(user_id))

    def drain(self, user_id: int) -> List[Notification]:
        """取出并清空用户的通知"""
        inbox = self._inbox(user_id)
        items = []
        while inbox:
            items.append(inbox.popleft())
        return items

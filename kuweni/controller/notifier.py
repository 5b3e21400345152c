"""
Notifier - 用户提示

所有操作共用一个提示通道，具体如何展示由前端决定。
"""

import logging
from dataclasses import dataclass
from typing import List, Literal, Protocol

logger = logging.getLogger(__name__)

Variant = Literal["default", "destructive"]


@dataclass
class Notification:
    title: str
    description: str
    variant: Variant = "default"


class Notifier(Protocol):
    def notify(self, notification: Notification) -> None: ...


class LogNotifier:
    """没有前端时直接写日志"""

    def notify(self, notification: Notification) -> None:
        level = logging.WARNING if notification.variant == "destructive" else logging.INFO
        logger.log(level, f"🔔 {notification.title}: {notification.description}")


class QueueNotifier:
    """先缓存提示，等前端取走（Streamlit 在下一次刷新时显示）"""

    def __init__(self):
        self.pending: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.pending.append(notification)

    def drain(self) -> List[Notification]:
        items, self.pending = self.pending, []
        return items

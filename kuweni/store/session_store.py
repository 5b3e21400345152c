# kuweni/store/session_store.py

"""
Session Store - 内存中的会话集合

功能：
- 创建 / 选择 / 删除会话
- 追加 / 删除消息
- 首条消息自动生成标题
- 订阅状态变化（前端据此刷新）

会话集合按创建时间倒序（最新在前）。当前会话只保存 id，读取时从集合中解析，
因此“当前会话”和集合里的同一条目永远一致。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from kuweni.config import Config
from kuweni.model.chat import DEFAULT_TITLE, ChatSession, Message

logger = logging.getLogger(__name__)

Listener = Callable[["StoreSnapshot"], None]


def derive_title(content: str, max_chars: Optional[int] = None) -> str:
    """首条消息的前 N 个字符 + 省略号"""
    limit = max_chars or Config.ui.title_max_chars
    return content[:limit] + "..."


@dataclass(frozen=True)
class StoreSnapshot:
    """某一时刻的完整状态"""
    sessions: Tuple[ChatSession, ...]
    current_id: Optional[str]

    @property
    def current(self) -> Optional[ChatSession]:
        if self.current_id is None:
            return None
        for s in self.sessions:
            if s.id == self.current_id:
                return s
        return None


class SessionStore:
    """会话状态容器；所有修改同步完成并产生新的快照"""

    def __init__(self):
        self._sessions: Tuple[ChatSession, ...] = ()
        self._current_id: Optional[str] = None
        self._listeners: List[Listener] = []
        # session_id -> 最近一次请求的 token
        self._tokens: Dict[str, int] = {}

    # =====================================================
    # Read
    # =====================================================

    @property
    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(sessions=self._sessions, current_id=self._current_id)

    @property
    def sessions(self) -> Tuple[ChatSession, ...]:
        return self._sessions

    @property
    def current(self) -> Optional[ChatSession]:
        return self.snapshot.current

    @property
    def current_id(self) -> Optional[str]:
        return self._current_id

    def get(self, session_id: str) -> Optional[ChatSession]:
        for s in self._sessions:
            if s.id == session_id:
                return s
        return None

    # =====================================================
    # Subscription
    # =====================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """注册监听器，返回取消订阅的函数"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, sessions: Tuple[ChatSession, ...], current_id: Optional[str]) -> None:
        self._sessions = sessions
        self._current_id = current_id
        snapshot = self.snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    def _replace(self, updated: ChatSession) -> None:
        sessions = tuple(updated if s.id == updated.id else s for s in self._sessions)
        self._commit(sessions, self._current_id)

    # =====================================================
    # Session operations
    # =====================================================

    def create_session(self) -> ChatSession:
        session = ChatSession()
        self._commit((session,) + self._sessions, session.id)
        logger.debug(f"🆕 Created session {session.id}")
        return session

    def select_session(self, session_id: str) -> Optional[ChatSession]:
        session = self.get(session_id)
        if session is None:
            logger.debug(f"Ignoring select of unknown session {session_id}")
            return None
        self._commit(self._sessions, session_id)
        return session

    def delete_session(self, session_id: str) -> bool:
        if self.get(session_id) is None:
            return False

        remaining = tuple(s for s in self._sessions if s.id != session_id)
        current_id = self._current_id
        if current_id == session_id:
            current_id = remaining[0].id if remaining else None

        self._tokens.pop(session_id, None)
        self._commit(remaining, current_id)
        logger.debug(f"🗑️ Deleted session {session_id}")
        return True

    # =====================================================
    # Request tokens
    # =====================================================

    def begin_request(self, session_id: str) -> int:
        """为会话签发新的请求 token，旧 token 随之失效"""
        token = self._tokens.get(session_id, 0) + 1
        self._tokens[session_id] = token
        return token

    def is_token_current(self, session_id: str, token: int) -> bool:
        return self.get(session_id) is not None and self._tokens.get(session_id) == token

    # =====================================================
    # Message operations
    # =====================================================

    def append_message(
        self,
        session_id: str,
        message: Message,
        token: Optional[int] = None,
    ) -> Optional[ChatSession]:
        """
        追加消息到会话末尾

        Args:
            token: 若提供，则只有与会话当前 token 一致时才写入（丢弃过期响应）

        Returns:
            更新后的会话；会话不存在或 token 过期时返回 None
        """
        session = self.get(session_id)
        if session is None:
            logger.warning(f"⚠️ Dropping message for missing session {session_id}")
            return None
        if token is not None and self._tokens.get(session_id) != token:
            logger.warning(f"⚠️ Dropping stale response for session {session_id} (token {token})")
            return None

        title = session.title
        if not session.messages:
            title = derive_title(message.content)

        updated = session.model_copy(
            update={"messages": [*session.messages, message], "title": title}
        )
        self._replace(updated)
        return updated

    def delete_message(self, session_id: str, message_id: str) -> Optional[ChatSession]:
        session = self.get(session_id)
        if session is None:
            return None

        messages = [m for m in session.messages if m.id != message_id]
        title = session.title if messages else DEFAULT_TITLE

        updated = session.model_copy(update={"messages": messages, "title": title})
        self._replace(updated)
        return updated

# kuweni/model/chat.py

"""
Chat 数据模型

会话与消息都只存在于内存中（不落盘）。
"""

from datetime import datetime
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

from kuweni.utils.ids import generate_id

DEFAULT_TITLE = "New Chat"

Role = Literal["user", "assistant"]


class Message(BaseModel):
    """一条消息，创建后不可修改（只能从会话中删除）"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    role: Role
    content: str
    timestamp: datetime = Field(default_factory=datetime.now)


class ChatSession(BaseModel):
    """聊天会话；每次修改都通过 model_copy 生成新对象"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=generate_id)
    title: str = DEFAULT_TITLE
    messages: List[Message] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)


def user_message(content: str) -> Message:
    return Message(role="user", content=content)


def assistant_message(content: str) -> Message:
    return Message(role="assistant", content=content)

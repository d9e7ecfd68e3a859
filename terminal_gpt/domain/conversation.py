"""会话状态：按顺序追加、仅存在于内存中的消息日志。

每一轮对话都会把完整的消息序列序列化为请求体发送给 Provider，
因此这里同时负责把会话编码为 chat/completions 所需的 JSON。
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from .exceptions import SerializationError
from .models import ChatMessage, Role


@dataclass
class ConversationState:
    """单次进程内的会话。

    - model: 发送给 Provider 的模型 ID（如 "gpt-3.5-turbo"）。
    - messages: 只追加、不删除、不重排的消息序列。
    """

    model: str
    messages: List[ChatMessage] = field(default_factory=list)

    @classmethod
    def start(cls, model: str, system_prompt: str) -> "ConversationState":
        """创建会话并写入唯一的一条 system 消息。"""

        state = cls(model=model)
        state.append(Role.SYSTEM, system_prompt)
        return state

    def append(self, role: Role, content: str) -> ChatMessage:
        if role is None:
            raise ValueError("role must not be None")
        message = ChatMessage(role=role, content=content)
        self.messages.append(message)
        return message

    def to_payload(self) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [m.to_payload() for m in self.messages],
        }

    def serialize(self) -> bytes:
        """编码为 UTF-8 JSON 请求体。

        内容里出现无法编码的字符（如孤立的代理码位）时抛出
        SerializationError，而不是让底层异常直接冒泡。
        """

        try:
            return json.dumps(self.to_payload(), ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError) as e:
            # UnicodeEncodeError 是 ValueError 的子类
            raise SerializationError(e) from e

    @property
    def last_message(self) -> Optional[ChatMessage]:
        return self.messages[-1] if self.messages else None

    def __len__(self) -> int:
        return len(self.messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(self.messages)

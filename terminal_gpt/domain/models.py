"""统一的对话消息模型。

本模块定义了终端聊天在各层之间共享的标准数据结构：

- Role: 消息角色（system/user/assistant），封闭枚举。
- ChatMessage: 一条对话消息，创建后不可修改。

Provider 适配层只在序列化时把 Role 转成小写字符串 token，
其余代码一律使用枚举本身。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Role(Enum):
    """LLM 消息角色（与 OpenAI chat/completions 的 role 字段对应）。"""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

    @property
    def token(self) -> str:
        """序列化时使用的小写字符串。"""

        return self.value


@dataclass(frozen=True)
class ChatMessage:
    """一条对话消息。

    - role: 消息角色。
    - content: 纯文本内容。
    """

    role: Role
    content: str

    def to_payload(self) -> Dict[str, str]:
        return {"role": self.role.token, "content": self.content}

"""Terminal GPT 顶层包。

该包提供一个终端聊天客户端：把用户输入转发给 OpenAI 风格的
chat/completions 端点并打印回复，包括配置加载、领域模型、
Provider 适配、对话轮次执行器与交互循环。
"""

from terminal_gpt.agents.exchange import ExchangeExecutor
from terminal_gpt.cli.loop import InteractiveLoop
from terminal_gpt.domain.conversation import ConversationState
from terminal_gpt.domain.models import ChatMessage, Role

__all__ = ["ChatMessage", "ConversationState", "ExchangeExecutor", "InteractiveLoop", "Role"]

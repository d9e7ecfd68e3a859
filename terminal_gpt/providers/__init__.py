"""LLM Provider 集成层。

该包下的模块负责：
- 维护 Provider 端点与默认模型配置 (registry)。
- 定义响应 schema 并提取回复文本 (schemas)。
- 提供 OpenAI chat/completions 的 HTTP 实现 (openai_client)。
"""

from typing import Optional

import httpx

from terminal_gpt.providers.openai_client import OpenAIClient


def create_provider(settings, transport: Optional[httpx.BaseTransport] = None) -> OpenAIClient:
    """根据配置创建 Provider 实例。"""

    return OpenAIClient(settings, transport=transport)

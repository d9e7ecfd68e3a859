"""对话轮次执行器。

一次轮次（Exchange）的完整流程：

1. 把用户输入追加为 user 消息（无论后续是否成功都保留，不回滚）。
2. 序列化整个会话为请求体。
3. 通过 Provider 发送一次同步 POST，得到响应文本。
4. 解析响应，取出 choices[0].message.content。
5. 打印回复，然后追加为 assistant 消息。

任何一步失败都以 ExchangeError 子类的形式抛给调用方，这里既不重试也不吞掉异常。
"""

import logging
import sys
import time
from typing import Any, Dict, Optional, Protocol, TextIO
from uuid import uuid4

from terminal_gpt.domain.conversation import ConversationState
from terminal_gpt.domain.exceptions import ExchangeError
from terminal_gpt.domain.models import Role
from terminal_gpt.infrastructure.logging.logger import logger
from terminal_gpt.providers.schemas import parse_reply


class CompletionTransport(Protocol):
    """发送请求体并返回响应文本的 Provider 协议。"""

    name: str

    def post_completion(self, body: bytes) -> str:
        ...


class ExchangeExecutor:
    def __init__(self, provider_client: CompletionTransport, output: Optional[TextIO] = None):
        self._provider_client = provider_client
        self._output = output

    def execute_turn(self, state: ConversationState, user_text: str) -> str:
        """执行一次对话轮次并返回助手回复。

        Args:
            state: 当前会话，会被原地修改
            user_text: 用户输入（已去除首尾空白）

        Returns:
            助手回复文本

        Raises:
            ExchangeError: 序列化、网络、状态码、读取、解析或缺少回复时
        """
        start_time = time.time()
        log_ctx: Dict[str, Any] = {
            "trace_id": f"tr-{uuid4().hex}",
            "provider": getattr(self._provider_client, "name", "unknown"),
            "model": state.model,
        }

        state.append(Role.USER, user_text)
        self._log(logging.INFO, "Stored user message", log_ctx, message_count=len(state), content=user_text)

        try:
            body = state.serialize()
            self._log(logging.INFO, "Calling provider", log_ctx, body_bytes=len(body))
            response_text = self._provider_client.post_completion(body)
            reply = parse_reply(response_text)
        except ExchangeError as e:
            self._log(
                logging.WARNING,
                "Exchange failed",
                log_ctx,
                code=e.code,
                error=e.describe(),
                elapsed_seconds=round(time.time() - start_time, 2),
            )
            raise

        print(f"\n-->GPT: {reply}", file=self._output or sys.stdout)
        state.append(Role.ASSISTANT, reply)

        self._log(
            logging.INFO,
            "Completed exchange",
            log_ctx,
            message_count=len(state),
            content=reply,
            elapsed_seconds=round(time.time() - start_time, 2),
        )
        return reply

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})

"""Terminal GPT 命令行入口。

启动顺序：读取配置 -> 初始化日志 -> 构建 HTTP 客户端并校验端点
-> 写入 system 消息 -> 进入交互循环。启动阶段的任何错误都是致命的，
打印一行到 stderr 后以非零状态退出；交互循环内的错误不会结束进程。
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from terminal_gpt.agents.exchange import ExchangeExecutor
from terminal_gpt.cli.loop import InteractiveLoop
from terminal_gpt.config.settings import load_settings
from terminal_gpt.domain.conversation import ConversationState
from terminal_gpt.domain.exceptions import ConfigurationError
from terminal_gpt.infrastructure.logging.logger import logger, setup_logger
from terminal_gpt.prompts import load_system_prompt
from terminal_gpt.providers import create_provider


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="terminal-gpt",
        description="Chat with an OpenAI-compatible model from the terminal",
    )
    parser.add_argument("--model", default=None, help="Model ID sent with every request")
    parser.add_argument("--system-prompt", default=None, help="System message for the session")
    parser.add_argument("--base-url", default=None, help="Base URL of the chat/completions API")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(
            model=args.model,
            system_prompt=args.system_prompt,
            openai_base_url=args.base_url,
        )
        setup_logger(settings.log_dir, settings.log_redact_content)
        provider = create_provider(settings)
    except ConfigurationError as e:
        print(f"Startup failed: {e.message}", file=sys.stderr)
        return 1

    state = ConversationState.start(
        model=settings.model,
        system_prompt=settings.system_prompt or load_system_prompt(),
    )
    logger.info(
        "Session started",
        extra={"extra": {"model": settings.model, "endpoint": provider.endpoint}},
    )

    with provider:
        loop = InteractiveLoop(ExchangeExecutor(provider), state)
        loop.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""终端入口：交互循环与命令行参数。"""

from terminal_gpt.cli.loop import InteractiveLoop

__all__ = ["InteractiveLoop"]

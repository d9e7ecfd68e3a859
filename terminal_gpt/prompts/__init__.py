"""系统提示词加载工具。

按语言(locale) 从 prompts/<locale> 目录读取默认的 system prompt 文本，
用于在会话开始时构造唯一的一条 system 消息。
"""

from pathlib import Path


PROMPTS_DIR = Path(__file__).resolve().parent


def load_system_prompt(locale: str = "en") -> str:
    """加载指定语言的默认系统提示词（去掉首尾空白）。"""

    fname = PROMPTS_DIR / locale / "system.md"
    return fname.read_text(encoding="utf-8").strip()

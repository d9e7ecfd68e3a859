"""Provider 与端点配置。

集中维护 Provider 的基础 URL、chat/completions 路径与默认模型，
Settings 的默认值与 HTTP 客户端的端点拼接都从这里读取，便于后续切换。"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderConfig:
    """某个 Provider 的整体配置。"""

    name: str
    base_url: str
    default_model: str
    chat_path: str = "/chat/completions"

    def endpoint(self, base_url: str = "") -> str:
        """拼接完整的 chat/completions URL，base_url 为空时使用默认值。"""

        base = (base_url or self.base_url).rstrip("/")
        return f"{base}{self.chat_path}"


OPENAI_CONFIG = ProviderConfig(
    name="openai",
    base_url="https://api.openai.com/v1",
    default_model="gpt-3.5-turbo",
)

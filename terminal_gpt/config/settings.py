"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置。

配置只在进程入口构建一次（load_settings），之后作为显式参数
传给需要它的组件（HTTP 客户端、日志、交互循环），不使用模块级全局实例。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from terminal_gpt.domain.exceptions import ConfigurationError
from terminal_gpt.providers.registry import OPENAI_CONFIG

API_KEY_ENV_VAR = "OPENAI_API_KEY_RUSTPROJECT"


def _load_config_from_yaml() -> Dict[str, Any]:
    """从 config.yaml 加载配置（若存在）。"""
    candidates = []
    explicit = os.getenv("TERMINAL_GPT_CONFIG_FILE")
    if explicit:
        candidates.append(Path(explicit).expanduser())
    candidates.append(Path.cwd() / "config.yaml")

    seen: set[Path] = set()
    for path in candidates:
        if path in seen:
            continue
        seen.add(path)
        try:
            if path.exists():
                data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
                if isinstance(data, dict):
                    return data
                warnings.warn(f"Config file {path} is not a mapping, ignored")
        except (OSError, yaml.YAMLError) as exc:
            warnings.warn(f"Failed to read config file {path}: {exc}")
    return {}


class Settings(BaseSettings):
    """终端聊天的配置（使用 Pydantic）。"""

    # ---- Provider 相关配置 ----
    openai_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices(API_KEY_ENV_VAR, "OPENAI_API_KEY", "openai_api_key"),
        description="OpenAI API 密钥",
    )
    openai_base_url: str = Field(
        default=OPENAI_CONFIG.base_url,
        description="chat/completions 端点的基础URL",
    )
    model: str = Field(
        default=OPENAI_CONFIG.default_model,
        description="请求体中的模型 ID",
    )
    system_prompt: Optional[str] = Field(
        default=None,
        description="会话开始时写入的 system 消息，为空时使用内置提示词",
    )
    http_timeout: float = Field(default=30.0, ge=1.0, description="HTTP 超时时间（秒）")

    # ---- 日志 ----
    log_dir: str = Field(default="logs", description="日志目录")
    log_redact_content: bool = Field(default=False, description="是否脱敏日志内容")

    model_config = SettingsConfigDict(
        env_prefix="TERMINAL_GPT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @field_validator("openai_api_key")
    @classmethod
    def validate_api_key(cls, v: Optional[str]) -> Optional[str]:
        if v and len(v) < 10:
            raise ValueError("API key seems too short")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )

    def require_api_key(self) -> str:
        """返回 API 密钥，缺失时抛出 ConfigurationError。"""

        if not self.openai_api_key:
            raise ConfigurationError(
                code="MISSING_API_KEY",
                message=f"{API_KEY_ENV_VAR} not set",
            )
        return self.openai_api_key


def load_settings(**overrides: Any) -> Settings:
    """构建配置对象；值为 None 的覆盖项会被忽略（例如未传的命令行参数）。"""

    values = {k: v for k, v in overrides.items() if v is not None}
    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigurationError(code="INVALID_CONFIG", message=_first_error(e)) from e


def _first_error(e: ValidationError) -> str:
    """把 ValidationError 压缩成一行：字段名: 原因。"""

    errors = e.errors()
    if not errors:
        return "invalid configuration"
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ())) or "settings"
    msg = " ".join(str(first.get("msg", "invalid value")).split())
    return f"{loc}: {msg}"

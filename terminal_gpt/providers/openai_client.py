"""OpenAI chat/completions 的 HTTP 适配器。

本模块负责：

1. 在启动时构建带固定请求头（Bearer 认证、JSON Content-Type）的 httpx 客户端，
   并校验端点 URL；任何一步失败都是致命的 ConfigurationError。
2. 把已经序列化好的请求体 POST 到端点，区分网络错误、非 200 状态码与
   响应体读取失败三类错误。

解析响应 JSON 的逻辑在 schemas.parse_reply 中，不在这里。
"""

from typing import Optional

import httpx

from terminal_gpt.domain.exceptions import (
    ConfigurationError,
    ReadResponseError,
    RequestError,
    ResponseError,
)
from terminal_gpt.providers.registry import OPENAI_CONFIG


class OpenAIClient:
    """OpenAI 提供方客户端实现。

    - name: Provider 名称（供日志/调试使用）。
    - post_completion: 发送一次请求并返回响应体文本。
    """

    name = "openai"

    def __init__(self, settings, transport: Optional[httpx.BaseTransport] = None):
        # Settings 里包含 base_url、api_key、超时等配置
        self._settings = settings
        self.endpoint = self._build_endpoint(getattr(settings, "openai_base_url", None))
        self._http = self._build_http_client(settings.require_api_key(), transport)

    def post_completion(self, body: bytes) -> str:
        """POST 请求体，返回状态码为 200 的完整响应文本。"""

        try:
            with self._http.stream("POST", self.endpoint, content=body) as resp:
                if resp.status_code != httpx.codes.OK:
                    raise ResponseError(resp.status_code)
                try:
                    resp.read()
                except (httpx.HTTPError, httpx.StreamError) as e:
                    # 连接在读取响应体的过程中中断
                    raise ReadResponseError(e) from e
                return resp.text
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时、TLS 失败等
            raise RequestError(e) from e

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "OpenAIClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @staticmethod
    def _build_endpoint(base_url: Optional[str]) -> str:
        endpoint = OPENAI_CONFIG.endpoint(base_url or "")
        try:
            url = httpx.URL(endpoint)
        except httpx.InvalidURL as e:
            raise ConfigurationError(code="INVALID_URL", message=f"Invalid URL: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(code="INVALID_URL", message=f"Invalid URL: {endpoint}")
        return endpoint

    def _build_http_client(
        self, api_key: str, transport: Optional[httpx.BaseTransport]
    ) -> httpx.Client:
        headers = {
            # Authorization 头用于传递 API 密钥
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        try:
            return httpx.Client(
                headers=headers,
                timeout=self._settings.http_timeout,
                trust_env=False,
                transport=transport,
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                code="CLIENT_BUILD_ERROR", message=f"Failed to build client: {e}"
            ) from e

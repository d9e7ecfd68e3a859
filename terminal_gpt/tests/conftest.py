import httpx
import pytest

from terminal_gpt.providers.openai_client import OpenAIClient


class SettingsStub:
    openai_api_key = "sk-test-key-123"
    openai_base_url = "https://api.openai.com/v1"
    http_timeout = 1.0

    def require_api_key(self):
        return self.openai_api_key


def reply_body(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}]}


@pytest.fixture
def make_client():
    """用 httpx.MockTransport 构造一个不走网络的 OpenAIClient。"""

    clients = []

    def _make(handler, settings=None):
        client = OpenAIClient(settings or SettingsStub(), transport=httpx.MockTransport(handler))
        clients.append(client)
        return client

    yield _make
    for c in clients:
        c.close()

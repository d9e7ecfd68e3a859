"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在交互循环或进程入口处做统一捕获与用户提示。

一次对话轮次（Exchange）中可能出现的错误都继承自 ExchangeError，
每个子类对应一种错误类别并携带各自的载荷（底层异常或状态码）。
交互循环只调用 describe() 输出一行可读信息，不再逐类判断。
"""

from http import HTTPStatus
from typing import Optional


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "REQUEST_ERROR"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 trace_id、status_code 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ConfigurationError(BusinessError):
    """启动阶段的致命错误：缺少密钥、端点 URL 非法、客户端构建失败。"""


class ExchangeError(BusinessError):
    """一次对话轮次失败时抛出，交互循环是唯一的恢复点。"""

    label = "Exchange error"

    def __init__(self, code: str, cause: Optional[BaseException] = None, **extra):
        self.cause = cause
        message = f"{self.label}: {cause}" if cause is not None else self.label
        super().__init__(code=code, message=message, **extra)

    def describe(self) -> str:
        """返回给终端用户看的一行错误描述。"""

        return self.message


class SerializationError(ExchangeError):
    """请求体无法编码为 JSON。"""

    label = "Serialization error"

    def __init__(self, cause: BaseException):
        super().__init__(code="SERIALIZATION_ERROR", cause=cause)


class RequestError(ExchangeError):
    """网络层错误，例如连接失败、DNS 解析失败、TLS 握手失败等。"""

    label = "Request error"

    def __init__(self, cause: BaseException):
        super().__init__(code="REQUEST_ERROR", cause=cause)


class ResponseError(ExchangeError):
    """服务端返回了非 200 状态码（429/5xx 同样不重试）。"""

    label = "Server responded with status"

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(code="RESPONSE_ERROR", status_code=status_code)
        self.http_status = status_code
        self.message = f"{self.label}: {_status_text(status_code)}"


class ReadResponseError(ExchangeError):
    """响应体读取失败（流中断、连接提前关闭等）。"""

    label = "Error reading response"

    def __init__(self, cause: BaseException):
        super().__init__(code="READ_RESPONSE_ERROR", cause=cause)


class ParseJsonError(ExchangeError):
    """响应体不是合法 JSON。"""

    label = "Error parsing JSON"

    def __init__(self, cause: BaseException):
        super().__init__(code="PARSE_JSON_ERROR", cause=cause)


class NoMessageFoundError(ExchangeError):
    """响应 JSON 中没有 choices[0].message.content 字符串。"""

    label = "No message found in response."

    def __init__(self):
        super().__init__(code="NO_MESSAGE_FOUND")


def _status_text(status_code: int) -> str:
    try:
        return f"{status_code} {HTTPStatus(status_code).phrase}"
    except ValueError:
        return str(status_code)

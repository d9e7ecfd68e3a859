"""chat/completions 响应的类型化 schema。

只声明我们真正依赖的字段（choices[].message.content），
其余字段一律忽略。缺字段、choices 为空或 content 不是字符串时
统一转换为 NoMessageFoundError，不做任何兜底提取。
"""

import json
from typing import Any, List

from pydantic import BaseModel, ConfigDict, StrictStr, ValidationError, field_validator

from terminal_gpt.domain.exceptions import NoMessageFoundError, ParseJsonError


class CompletionMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: StrictStr


class CompletionChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: CompletionMessage


class CompletionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    choices: List[CompletionChoice]

    @field_validator("choices", mode="before")
    @classmethod
    def keep_first_choice(cls, v: Any) -> Any:
        # 只读取 choices[0]，后续候选的格式不影响结果
        if isinstance(v, list):
            return v[:1]
        return v


def parse_reply(body: str) -> str:
    """解析响应体并提取 choices[0].message.content。

    先用 json 解析为通用结构（失败 -> ParseJsonError），
    再按 schema 校验（失败 -> NoMessageFoundError）。
    """

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, RecursionError) as e:
        # 嵌套过深的数组/对象会超出解释器递归深度
        raise ParseJsonError(e) from e
    try:
        resp = CompletionResponse.model_validate(data)
    except ValidationError as e:
        raise NoMessageFoundError() from e
    if not resp.choices:
        raise NoMessageFoundError()
    return resp.choices[0].message.content

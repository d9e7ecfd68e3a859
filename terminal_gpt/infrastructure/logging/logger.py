import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from terminal_gpt.domain.exceptions import ConfigurationError

LOGGER_NAME = "terminal_gpt"
LOG_FILE_NAME = "terminal_gpt.log"
# 携带对话原文的 extra 字段，脱敏时只保留前 64 个字符
CONTENT_FIELDS = ("content",)
REDACT_LIMIT = 64

logger = logging.getLogger(LOGGER_NAME)


class JsonFormatter(logging.Formatter):
    def __init__(self, redact_content: bool = False):
        super().__init__()
        self._redact_content = redact_content

    def format(self, record: logging.LogRecord) -> str:
        msg = record.getMessage()
        if self._redact_content:
            msg = (msg or "")[:REDACT_LIMIT]
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        if self._redact_content:
            for key in CONTENT_FIELDS:
                if isinstance(payload.get(key), str):
                    payload[key] = payload[key][:REDACT_LIMIT]
        # 用户原文可能含孤立代理码位，转义后写入 utf-8 文件不会失败
        return json.dumps(payload, default=str)


def setup_logger(log_dir: str | Path = "logs", redact_content: bool = False) -> logging.Logger:
    """挂载 JSON 文件日志；终端只留给对话本身，因此不输出到 stdout/stderr。

    日志目录无法创建或日志文件无法打开时抛出 ConfigurationError。
    """

    logger.setLevel(logging.INFO)
    logger.propagate = False
    log_path = (Path(log_dir) / LOG_FILE_NAME).resolve()
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == log_path:
            return logger
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            code="LOG_SETUP_ERROR",
            message=f"Cannot open log file {log_path}: {e.strerror or e}",
        ) from e
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter(redact_content))
    logger.addHandler(fh)
    return logger

"""Runtime settings for the adexit tooling itself."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any


VALID_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
VALID_LOG_FORMATS = {"ecs_json", "text"}
VALID_LOG_SINKS = {"stdout", "stderr", "file"}

LOG_LEVEL_ENV = "ADEXIT_LOG_LEVEL"


@dataclass(slots=True)
class LoggingConfig:
    level: str = "WARNING"
    fmt: str = "ecs_json"
    sink: str = "stderr"
    file_path: str | None = None
    service_name: str = "adexit"


def parse_logging_config(data: dict[str, Any] | None = None) -> LoggingConfig:
    raw = data or {}
    if not isinstance(raw, dict):
        raise ValueError("'logging' must be an object")
    level = str(raw.get("level") or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    if level not in VALID_LOG_LEVELS:
        raise ValueError(f"invalid log level '{level}'")
    log_format = str(raw.get("fmt") or "ecs_json")
    if log_format not in VALID_LOG_FORMATS:
        raise ValueError(f"invalid log format '{log_format}'")
    sink = str(raw.get("sink") or "stderr")
    if sink not in VALID_LOG_SINKS:
        raise ValueError(f"invalid log sink '{sink}'")
    file_path = raw.get("file_path")
    if sink == "file" and not file_path:
        raise ValueError("'logging.file_path' is required when sink is 'file'")
    return LoggingConfig(
        level=level,
        fmt=log_format,
        sink=sink,
        file_path=str(file_path) if file_path else None,
        service_name=str(raw.get("service_name") or "adexit"),
    )

"""Config loading."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from adexit.config.documents import read_document
from adexit.config.schema import ExitConfig, validate_config


def load_config(path: Path, vendors: Mapping[str, Any] | None = None) -> ExitConfig:
    return validate_config(read_document(path), vendors=vendors)


__all__ = ["load_config", "read_document"]

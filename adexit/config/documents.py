"""Decoding of config and vendor catalog files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from adexit.config.errors import ConfigParseError


JSON_SUFFIXES = {".json"}


def read_document(path: Path, *, label: str = "config file") -> Any:
    """Decode ``path`` as JSON when it ends in ``.json``, otherwise as YAML.

    An empty or blank file decodes to ``None``.
    """
    if not path.exists():
        raise FileNotFoundError(f"{label} does not exist: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigParseError("%s '%s' is not valid UTF-8: %s", label, str(path), exc) from exc

    if path.suffix.lower() in JSON_SUFFIXES:
        if not text.strip():
            return None
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigParseError("%s '%s' is not valid JSON: %s", label, str(path), exc) from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigParseError("%s '%s' is not valid YAML: %s", label, str(path), exc) from exc

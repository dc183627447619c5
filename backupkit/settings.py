"""Loosely typed key/value settings and the model configuration records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _to_string(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return ""


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        if value in _TRUE_WORDS:
            return True
        if value in _FALSE_WORDS:
            return False
    return False


class Settings:
    """Case-insensitive settings with defaults and lenient typed getters."""

    def __init__(self, values: Optional[dict[str, Any]] = None) -> None:
        self._values: dict[str, Any] = {}
        self._defaults: dict[str, Any] = {}
        for key, value in (values or {}).items():
            self.set(key, value)

    def set(self, key: str, value: Any) -> None:
        """Set ``key`` explicitly; an explicit value wins over a default."""
        self._values[key.lower()] = value

    def set_default(self, key: str, value: Any) -> None:
        """Set the value used when ``key`` has not been set explicitly."""
        self._defaults[key.lower()] = value

    def get(self, key: str) -> Any:
        """Return the value of ``key``, its default, or None."""
        lowered = key.lower()
        if lowered in self._values:
            return self._values[lowered]
        return self._defaults.get(lowered)

    def get_string(self, key: str) -> str:
        return _to_string(self.get(key))

    def get_bool(self, key: str) -> bool:
        return _to_bool(self.get(key))

    def get_string_list(self, key: str) -> list[str]:
        """Return a list value as strings; a string is split on whitespace."""
        value = self.get(key)
        if value is None:
            return []
        if isinstance(value, str):
            return value.split()
        if isinstance(value, (list, tuple)):
            return [_to_string(item) for item in value]
        return []

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __repr__(self) -> str:
        return f"Settings({self._values!r})"


@dataclass
class SubConfig:
    """A named, typed section of a model (a database, compressor, encryptor)."""

    name: str = ""
    type: str = ""
    settings: Settings = field(default_factory=Settings)


@dataclass
class ModelConfig:
    """Configuration of one backup model."""

    name: str = ""
    description: str = ""
    dump_path: str = ""
    temp_path: str = ""
    before_script: str = ""
    after_script: str = ""
    compress_with: SubConfig = field(default_factory=SubConfig)
    encrypt_with: SubConfig = field(default_factory=SubConfig)
    archive: Optional[Settings] = None
    databases: list[SubConfig] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)
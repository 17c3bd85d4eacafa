from __future__ import annotations
"""Text codecs used to persist settings mappings."""

import json
import tomllib
from typing import Any, Protocol

import tomli_w

from .errors import DeserializationError, SerializationError


class Codec(Protocol):
    """Converts a plain mapping to text and back."""

    extension: str

    def dumps(self, data: dict[str, Any]) -> str:
        ...

    def loads(self, text: str) -> dict[str, Any]:
        ...


class TomlCodec:
    """TOML codec backed by :mod:`tomllib` and ``tomli_w``."""

    extension = "toml"

    def dumps(self, data: dict[str, Any]) -> str:
        try:
            return tomli_w.dumps(data)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Unable to encode settings as TOML: {exc}") from exc

    def loads(self, text: str) -> dict[str, Any]:
        try:
            return tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise DeserializationError(f"Invalid TOML: {exc}") from exc


class JsonCodec:
    """Indented JSON codec."""

    extension = "json"

    def __init__(self, indent: int = 2):
        self._indent = indent

    def dumps(self, data: dict[str, Any]) -> str:
        try:
            return json.dumps(data, indent=self._indent, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Unable to encode settings as JSON: {exc}") from exc

    def loads(self, text: str) -> dict[str, Any]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DeserializationError(f"Invalid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise DeserializationError("Settings root is not an object")
        return data

"""Canonical JSON rendering of records and selected parts."""

from __future__ import annotations

import json
import pathlib
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from src.tachoview.config import EXPORT_INDENT, INLINE_INDENT

ALL_PARTS_KEY = "all"
_DEFAULT_STEM = "record"


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, Enum):
        return _key_text(key.value)
    if key is None or isinstance(key, (bool, int, float)):
        return json.dumps(key)
    return str(key)


def normalize_maps(value: Any) -> Any:
    """Rewrite nested map-like values into plain ``dict``/``list`` structures.

    Keys are coerced to strings and insertion order is kept. Scalars and
    binary payloads are returned untouched.
    """

    if isinstance(value, BaseModel):
        return normalize_maps(value.model_dump(by_alias=True))
    if isinstance(value, Mapping):
        return {_key_text(key): normalize_maps(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_maps(item) for item in value]
    return value


def to_serializable(value: Any) -> Any:
    """Like :func:`normalize_maps` but also renders bytes and enums for JSON."""

    if isinstance(value, BaseModel):
        return to_serializable(value.model_dump(by_alias=True))
    if isinstance(value, Mapping):
        return {_key_text(key): to_serializable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_serializable(item) for item in value]
    if isinstance(value, (bytes, bytearray, memoryview)):
        return list(bytes(value))
    if isinstance(value, Enum):
        return to_serializable(value.value)
    return value


def serialize(value: Any, indent: int = INLINE_INDENT) -> str:
    return json.dumps(to_serializable(value), indent=indent, ensure_ascii=False)


def export_file_name(file_name: str | None, key: str = ALL_PARTS_KEY, suffix: str = ".json") -> str:
    """``Card0004.DDD`` -> ``Card0004-<key>.json``."""

    stem = pathlib.PurePath(file_name).stem if file_name else ""
    return f"{stem or _DEFAULT_STEM}-{key}{suffix}"


@dataclass(slots=True, frozen=True)
class ExportDocument:
    """Downloadable JSON export."""

    file_name: str
    text: str
    media_type: str = "application/json"

    @property
    def content(self) -> bytes:
        return self.text.encode("utf-8")


def build_export(
    value: Any,
    file_name: str | None,
    key: str = ALL_PARTS_KEY,
    *,
    indent: int = EXPORT_INDENT,
) -> ExportDocument:
    return ExportDocument(file_name=export_file_name(file_name, key), text=serialize(value, indent))


__all__ = [
    "ALL_PARTS_KEY",
    "ExportDocument",
    "build_export",
    "export_file_name",
    "normalize_maps",
    "serialize",
    "to_serializable",
]

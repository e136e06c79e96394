"""Turn raw tachograph downloads into record mappings via a pluggable parser."""

from __future__ import annotations

import json
import pathlib
from collections.abc import Mapping
from typing import Any, Callable

from src.tachoview.config import Settings, load_callable

Parser = Callable[[bytes], Any]


class RecordDecodeError(ValueError):
    """The parser could not decode the supplied bytes."""


def parse_json_record(data: bytes) -> Mapping[str, Any]:
    """Default parser for records already exported as JSON by the decoder."""

    try:
        payload = json.loads(data.decode("utf-8-sig"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RecordDecodeError(f"Record is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise RecordDecodeError("Record JSON must be an object.")
    return payload


def _resolve_parser(parser: Parser | str | None) -> Parser:
    if parser is None:
        return parse_json_record
    if isinstance(parser, str):
        return load_callable(parser)
    return parser


class RecordReader:
    """Record ingestion (JSON always, binary through a configured parser)."""

    def __init__(self, parser: Parser | str | None = None) -> None:
        self.parser = _resolve_parser(parser)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "RecordReader":
        settings = settings or Settings.from_env()
        return cls(settings.parser)

    def from_bytes(self, data: bytes) -> Any:
        if not data:
            raise RecordDecodeError("No data provided.")
        try:
            return self.parser(data)
        except RecordDecodeError:
            raise
        except Exception as exc:
            raise RecordDecodeError(f"Parser failed: {exc}") from exc

    def from_path(self, path: str | pathlib.Path) -> tuple[Any, str]:
        """Parse ``path`` and return the record with its file name."""

        target = pathlib.Path(path)
        return self.from_bytes(target.read_bytes()), target.name


__all__ = ["Parser", "RecordDecodeError", "RecordReader", "parse_json_record"]

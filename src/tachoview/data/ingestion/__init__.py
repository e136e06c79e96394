"""Ingestion utilities for tachograph records."""

from .record_reader import Parser, RecordDecodeError, RecordReader, parse_json_record

__all__ = ["Parser", "RecordDecodeError", "RecordReader", "parse_json_record"]

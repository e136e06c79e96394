"""JSON and archive exports."""

from .export import (
    ALL_PARTS_KEY,
    ExportDocument,
    build_export,
    export_file_name,
    normalize_maps,
    serialize,
    to_serializable,
)

__all__ = [
    "ALL_PARTS_KEY",
    "ExportDocument",
    "build_export",
    "export_file_name",
    "normalize_maps",
    "serialize",
    "to_serializable",
]

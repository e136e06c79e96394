"""Helpers for producing ZIP archives of a loaded record and its parts."""

from __future__ import annotations

import io
import zipfile

from src.tachoview.catalog.frame import catalog_csv
from src.tachoview.navigation.engine import ViewerEngine
from src.tachoview.reporting.export import export_file_name, serialize

__all__ = ["build_record_archive"]


def build_record_archive(engine: ViewerEngine) -> bytes | None:
    """Create a ZIP with the full record, the catalog and one file per part.

    Parts land under a folder named after their generation tag, since the
    same key can exist for both card generations.
    """

    session = engine.session
    if not session.has_record:
        return None

    indent = engine.settings.export_indent
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, mode="w", compression=zipfile.ZIP_DEFLATED) as archive:
        archive.writestr(export_file_name(session.file_name), serialize(session.record, indent))
        archive.writestr("catalog.csv", catalog_csv(session.menu))
        for entry, data in engine.iter_parts():
            name = export_file_name(session.file_name, entry.key)
            archive.writestr(f"{entry.generation_tag}/{name}", serialize(data, indent))

    buffer.seek(0)
    return buffer.getvalue()

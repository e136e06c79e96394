"""Tabular views of the navigation catalog."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd

from src.tachoview.catalog.menu import MenuEntry, MenuHeader, RenderInstruction

COLUMNS = ["group", "title", "key", "generation_tag"]


def catalog_frame(instructions: Iterable[RenderInstruction]) -> pd.DataFrame:
    """One row per selectable entry, labelled with the header it sits under."""

    rows: list[dict[str, Any]] = []
    group = ""
    for item in instructions:
        if isinstance(item, MenuHeader):
            group = item.title
        elif isinstance(item, MenuEntry):
            rows.append(
                {
                    "group": group,
                    "title": item.title,
                    "key": item.key,
                    "generation_tag": item.generation_tag,
                }
            )
    return pd.DataFrame(rows, columns=COLUMNS)


def vu_type_counts(items: Iterable[Mapping[str, Any]]) -> pd.DataFrame:
    """Count VU transfer items per ``typeId`` keeping first-occurrence order."""

    type_ids = [str(item.get("typeId")) for item in items if item.get("typeId") is not None]
    if not type_ids:
        return pd.DataFrame({"type_id": pd.Series(dtype=str), "count": pd.Series(dtype="int64")})
    series = pd.Series(type_ids, name="type_id")
    counts = series.groupby(series, sort=False).size()
    return counts.rename("count").rename_axis("type_id").reset_index()


def catalog_csv(instructions: Iterable[RenderInstruction]) -> str:
    return catalog_frame(instructions).to_csv(index=False)


__all__ = ["COLUMNS", "catalog_csv", "catalog_frame", "vu_type_counts"]

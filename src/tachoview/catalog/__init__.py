"""Data part catalog, presence scanning and menu construction."""

from .parts import CATALOG, GEN1_ROWS, GEN2_ROWS, CatalogRow, PartGroup, rows_for
from .presence import scan
from .menu import MenuDivider, MenuEntry, MenuHeader, RenderInstruction, build_menu
from .frame import catalog_csv, catalog_frame, vu_type_counts

__all__ = [
    "CATALOG",
    "CatalogRow",
    "GEN1_ROWS",
    "GEN2_ROWS",
    "MenuDivider",
    "MenuEntry",
    "MenuHeader",
    "PartGroup",
    "RenderInstruction",
    "build_menu",
    "catalog_csv",
    "catalog_frame",
    "rows_for",
    "scan",
    "vu_type_counts",
]

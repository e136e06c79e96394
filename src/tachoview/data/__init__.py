"""Data layer: typed record views and ingestion."""

from .schemas import (
    CARD_DATA_TYPE,
    CardBlocks,
    CardGenBlock,
    Gen2CardBlock,
    Generation,
    GenerationTag,
    Header,
    TachographRecord,
)
from .ingestion import RecordDecodeError, RecordReader

__all__ = [
    "CARD_DATA_TYPE",
    "CardBlocks",
    "CardGenBlock",
    "Gen2CardBlock",
    "Generation",
    "GenerationTag",
    "Header",
    "RecordDecodeError",
    "RecordReader",
    "TachographRecord",
]

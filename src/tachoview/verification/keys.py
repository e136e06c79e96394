"""ERCA root public keys bound to each card generation."""

from __future__ import annotations

import functools
import logging
import pathlib
from typing import Dict

from src.tachoview.config import Settings
from src.tachoview.data.schemas import GenerationTag

logger = logging.getLogger(__name__)

# Gen1 keys are the raw 144 byte ERCA key, Gen2 keys the 205 byte root certificate.
ERCA_KEY_LENGTHS: Dict[GenerationTag, int] = {
    GenerationTag.GEN1: 144,
    GenerationTag.GEN2: 205,
}


class PublicKeyError(ValueError):
    """Raised when key material does not fit the card generation."""


def check_key_length(tag: GenerationTag, public_key: bytes) -> None:
    if not public_key:
        raise PublicKeyError("ERCA public key is not provided.")
    expected = ERCA_KEY_LENGTHS.get(tag)
    if expected is None:
        raise PublicKeyError(f"No ERCA key is defined for {tag.value}.")
    if len(public_key) != expected:
        raise PublicKeyError(
            f"ERCA public key for card {tag.value} needs {expected} bytes but has {len(public_key)}."
        )


@functools.lru_cache(maxsize=8)
def read_key_file(path: str) -> bytes | None:
    """Read a key file once; a missing file yields ``None``."""

    target = pathlib.Path(path)
    if not target.is_file():
        logger.info("ERCA key file %s not found", target)
        return None
    return target.read_bytes()


def load_erca_keys(settings: Settings | None = None) -> Dict[GenerationTag, bytes | None]:
    settings = settings or Settings.from_env()
    return {
        GenerationTag.GEN1: read_key_file(str(settings.erca_gen1_key)),
        GenerationTag.GEN2: read_key_file(str(settings.erca_gen2_key)),
    }


__all__ = [
    "ERCA_KEY_LENGTHS",
    "PublicKeyError",
    "check_key_length",
    "load_erca_keys",
    "read_key_file",
]

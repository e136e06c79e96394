"""Deferred signature verification."""

from .dispatcher import (
    DeferredQueue,
    VerificationDispatcher,
    VerificationOutcome,
    VerifyStatus,
    call_soon_scheduler,
)
from .keys import ERCA_KEY_LENGTHS, PublicKeyError, load_erca_keys

__all__ = [
    "DeferredQueue",
    "ERCA_KEY_LENGTHS",
    "PublicKeyError",
    "VerificationDispatcher",
    "VerificationOutcome",
    "VerifyStatus",
    "call_soon_scheduler",
    "load_erca_keys",
]

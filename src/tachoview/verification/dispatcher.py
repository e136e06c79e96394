"""Deferred, fire-and-forget signature verification per card generation."""

from __future__ import annotations

import asyncio
import copy
import functools
import logging
from collections import deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict

from src.tachoview.data.schemas import CardBlocks, GenerationTag
from src.tachoview.verification.keys import check_key_length

logger = logging.getLogger(__name__)

Verifier = Callable[[Mapping[str, Any], bytes], bool]
Scheduler = Callable[[Callable[[], None]], None]
ResultCallback = Callable[["VerificationOutcome"], None]


class VerifyStatus(str, Enum):
    VALID = "Valid"
    INVALID = "Invalid"
    ERROR = "Error"


@dataclass(slots=True, frozen=True)
class VerificationOutcome:
    """Result of one verification task, tagged with the record it belongs to."""

    record_version: int
    generation_tag: GenerationTag
    status: VerifyStatus
    detail: str | None = None

    def as_payload(self) -> Dict[str, Any]:
        return {
            "recordVersion": self.record_version,
            "generationTag": self.generation_tag.value,
            "status": self.status.value,
            "detail": self.detail,
        }


@dataclass(slots=True, frozen=True)
class VerificationTask:
    """Immutable snapshot of everything one verification needs."""

    record_version: int
    generation_tag: GenerationTag
    data_files: Mapping[str, Any]
    public_key: bytes

    def run(self, verifier: Verifier) -> VerificationOutcome:
        try:
            check_key_length(self.generation_tag, self.public_key)
            valid = bool(verifier(self.data_files, self.public_key))
        except Exception as exc:
            logger.warning(
                "Verification of %s data failed: %s",
                self.generation_tag.value,
                exc,
                exc_info=True,
            )
            return VerificationOutcome(
                self.record_version, self.generation_tag, VerifyStatus.ERROR, str(exc)
            )
        status = VerifyStatus.VALID if valid else VerifyStatus.INVALID
        return VerificationOutcome(self.record_version, self.generation_tag, status)


class DeferredQueue:
    """FIFO of deferred callables drained explicitly by the host loop."""

    def __init__(self) -> None:
        self._pending: deque[Callable[[], None]] = deque()

    def __call__(self, task: Callable[[], None]) -> None:
        self._pending.append(task)

    def __len__(self) -> int:
        return len(self._pending)

    def run_pending(self) -> int:
        """Run queued tasks, including ones queued while draining."""

        executed = 0
        while self._pending:
            task = self._pending.popleft()
            task()
            executed += 1
        return executed


def call_soon_scheduler(task: Callable[[], None], fallback: Scheduler | None = None) -> None:
    """Run ``task`` on the loop's executor after the current loop step.

    Without a running event loop the task is handed to ``fallback``, which
    holds it until the host drains it. With neither, ``RuntimeError`` is raised.
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        if fallback is None:
            raise RuntimeError("call_soon_scheduler needs a running event loop or a fallback.") from None
        fallback(task)
        return
    loop.call_soon(loop.run_in_executor, None, task)


def _snapshot(data_files: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(copy.deepcopy(dict(data_files)))


class VerificationDispatcher:
    """Schedules at most one verification per present card generation.

    The default scheduler hands tasks to the running event loop. Outside a
    loop they wait in :attr:`pending` until the host calls
    :meth:`run_pending`, so no result arrives before ``dispatch`` returns.
    """

    def __init__(
        self,
        verifier: Verifier | None,
        public_keys: Mapping[GenerationTag, bytes | None],
        *,
        scheduler: Scheduler | None = None,
        on_result: ResultCallback | None = None,
    ) -> None:
        self.verifier = verifier
        self.public_keys = dict(public_keys)
        self.pending = DeferredQueue()
        if scheduler is None:
            scheduler = functools.partial(call_soon_scheduler, fallback=self.pending)
        self.scheduler = scheduler
        self.on_result = on_result

    def run_pending(self) -> int:
        return self.pending.run_pending()

    def dispatch(self, blocks: CardBlocks, record_version: int) -> list[VerificationTask]:
        if self.verifier is None:
            logger.info("No verifier configured, skipping signature verification")
            return []

        tasks: list[VerificationTask] = []
        for tag, block in blocks.present():
            data_files = block.data_files
            if not isinstance(data_files, Mapping) or not data_files:
                logger.info("No data files to verify for %s", tag.value)
                continue
            public_key = self.public_keys.get(tag)
            if not public_key:
                logger.warning("No ERCA public key available for %s", tag.value)
                continue
            task = VerificationTask(record_version, tag, _snapshot(data_files), bytes(public_key))
            self.scheduler(functools.partial(self._execute, task))
            tasks.append(task)
        return tasks

    def _execute(self, task: VerificationTask) -> None:
        outcome = task.run(self.verifier)
        if self.on_result is None:
            return
        try:
            self.on_result(outcome)
        except Exception:
            logger.exception("Verification result handler failed for %s", task.generation_tag.value)


__all__ = [
    "DeferredQueue",
    "ResultCallback",
    "Scheduler",
    "VerificationDispatcher",
    "VerificationOutcome",
    "VerificationTask",
    "Verifier",
    "VerifyStatus",
    "call_soon_scheduler",
]

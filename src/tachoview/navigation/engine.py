"""Navigation engine tying catalog, selection, export and verification together."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Mapping

from src.tachoview.catalog.menu import MenuEntry, RenderInstruction, build_menu
from src.tachoview.config import Settings
from src.tachoview.data.schemas import CardBlocks, GenerationTag, TachographRecord
from src.tachoview.navigation.resolver import resolve
from src.tachoview.navigation.session import SelectionState, SessionState
from src.tachoview.navigation.sink import ExportButton, NullSink, ViewSink
from src.tachoview.reporting.export import (
    ALL_PARTS_KEY,
    ExportDocument,
    build_export,
    normalize_maps,
    serialize,
)
from src.tachoview.verification.dispatcher import (
    Scheduler,
    VerificationDispatcher,
    VerificationOutcome,
    Verifier,
)
from src.tachoview.verification.keys import load_erca_keys

logger = logging.getLogger(__name__)


def _typed_view(record: Any) -> tuple[TachographRecord | None, CardBlocks | None]:
    try:
        view = TachographRecord.model_validate(record)
        return view, view.card_blocks()
    except ValueError as exc:  # pydantic.ValidationError included
        logger.warning("Record is malformed, showing raw content only: %s", exc)
        return None, None


class ViewerEngine:
    """Single-session viewer over one loaded tachograph record at a time."""

    def __init__(
        self,
        sink: ViewSink | None = None,
        *,
        verifier: Verifier | None = None,
        public_keys: Mapping[GenerationTag, bytes | None] | None = None,
        scheduler: Scheduler | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or Settings.from_env()
        self.sink: ViewSink = sink if sink is not None else NullSink()
        self.session = SessionState()
        if public_keys is None:
            public_keys = load_erca_keys(self.settings)
        self.dispatcher = VerificationDispatcher(
            verifier,
            public_keys,
            scheduler=scheduler,
            on_result=self._deliver_outcome,
        )

    def load_record(self, record: Any, file_name: str | None = None) -> tuple[RenderInstruction, ...]:
        """Replace the session with ``record`` and return its menu.

        Verification is only scheduled here; it runs after this call returns.
        """

        normalized = normalize_maps(record)
        view, blocks = _typed_view(normalized)
        menu = build_menu(view, blocks) if view is not None else ()
        version = self.session.reset(normalized, file_name, view=view, blocks=blocks, menu=menu)
        logger.info(
            "Loaded %s (version %d) with %d menu entries",
            file_name or "record",
            version,
            sum(1 for item in menu if isinstance(item, MenuEntry)),
        )

        self.sink.reset()
        for item in menu:
            self.sink.render_entry(item)
        self.sink.render_content(serialize(normalized, self.settings.display_indent))
        self.sink.set_button_enabled(ExportButton.ALL, True)
        self.sink.set_button_enabled(ExportButton.SELECTED, False)

        if blocks is not None:
            self.dispatcher.dispatch(blocks, version)
        return menu

    def on_select(self, key: str, generation_tag: GenerationTag | str) -> Any | None:
        data = resolve(self.session, key, generation_tag)
        if data is None:
            logger.debug("Nothing found for %s/%s", generation_tag, key)
            return None
        tag = generation_tag.value if isinstance(generation_tag, GenerationTag) else str(generation_tag)
        self.session.selection = SelectionState(key=key, generation_tag=tag, data=data)
        self.sink.render_content(serialize(data, self.settings.display_indent))
        self.sink.set_button_enabled(ExportButton.SELECTED, True)
        return data

    @property
    def can_export_all(self) -> bool:
        return self.session.has_record

    @property
    def can_export_selected(self) -> bool:
        return self.session.has_selection

    def export_all(self) -> ExportDocument | None:
        if not self.can_export_all:
            return None
        return build_export(
            self.session.record,
            self.session.file_name,
            ALL_PARTS_KEY,
            indent=self.settings.export_indent,
        )

    def export_selected(self) -> ExportDocument | None:
        selection = self.session.selection
        if selection is None:
            return None
        return build_export(
            selection.data,
            self.session.file_name,
            selection.key,
            indent=self.settings.export_indent,
        )

    def run_pending_verification(self) -> int:
        """Run verification held back because no event loop was running."""

        return self.dispatcher.run_pending()

    def iter_parts(self) -> Iterator[tuple[MenuEntry, Any]]:
        """Yield every menu entry with its data without touching the selection."""

        for item in self.session.menu:
            if isinstance(item, MenuEntry):
                data = resolve(self.session, item.key, item.generation_tag)
                if data is not None:
                    yield item, data

    def _deliver_outcome(self, outcome: VerificationOutcome) -> None:
        if outcome.record_version != self.session.version:
            logger.info(
                "Discarding %s verification result for superseded record version %d",
                outcome.generation_tag.value,
                outcome.record_version,
            )
            return
        logger.info(
            "Verification of %s data: %s",
            outcome.generation_tag.value,
            outcome.status.value,
        )
        self.sink.verification_result(outcome)


__all__ = ["ViewerEngine"]

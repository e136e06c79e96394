"""Export a parsed tachograph record and each of its parts as JSON files."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.tachoview.catalog.menu import MenuDivider, MenuEntry, MenuHeader  # noqa: E402
from src.tachoview.config import Settings, load_callable  # noqa: E402
from src.tachoview.data.ingestion import RecordDecodeError, RecordReader  # noqa: E402
from src.tachoview.logs import configure_logging  # noqa: E402
from src.tachoview.navigation import RecordingSink, ViewerEngine  # noqa: E402
from src.tachoview.reporting.export import export_file_name, serialize  # noqa: E402

VERIFY_SUFFIX = "_verify.json"

logger = logging.getLogger("export_record")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("record", type=Path, help="record file (JSON or a parser-supported download)")
    parser.add_argument("-o", "--out-dir", type=Path, default=None, help="output directory")
    parser.add_argument("--parser", default=None, help="parser plug-in as module:function")
    parser.add_argument("--verifier", default=None, help="verifier plug-in as module:function")
    parser.add_argument("--menu-only", action="store_true", help="print the catalog and exit")
    return parser.parse_args(argv)


def print_menu(engine: ViewerEngine) -> None:
    for item in engine.session.menu:
        if isinstance(item, MenuHeader):
            print(f"[{item.title}]")
        elif isinstance(item, MenuDivider):
            print("-" * 24)
        elif isinstance(item, MenuEntry):
            print(f"  {item.title:<28} {item.generation_tag}")


def verify_file_name(file_name: str | None) -> str:
    """``Card0004.DDD`` -> ``Card0004_verify.json``."""

    stem = Path(file_name).stem if file_name else ""
    return f"{stem or 'record'}{VERIFY_SUFFIX}"


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = Settings.from_env()
    configure_logging(settings.log_level)

    reader = RecordReader(args.parser or settings.parser)
    try:
        record, file_name = reader.from_path(args.record)
    except (OSError, RecordDecodeError) as exc:
        logger.error("Cannot read %s: %s", args.record, exc)
        return 1

    verifier_path = args.verifier or settings.verifier
    sink = RecordingSink()
    engine = ViewerEngine(
        sink,
        verifier=load_callable(verifier_path) if verifier_path else None,
        settings=settings,
    )
    engine.load_record(record, file_name)
    print_menu(engine)
    if args.menu_only:
        return 0

    out_dir = args.out_dir or args.record.parent
    out_dir.mkdir(parents=True, exist_ok=True)

    document = engine.export_all()
    if document is not None:
        (out_dir / document.file_name).write_text(document.text, encoding="utf-8")
        print(f"Saved {out_dir / document.file_name}")

    for entry, data in engine.iter_parts():
        target = out_dir / entry.generation_tag / export_file_name(file_name, entry.key)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(serialize(data, settings.export_indent), encoding="utf-8")
        print(f"Saved {target}")

    engine.run_pending_verification()
    outcomes = [outcome.as_payload() for outcome in sink.outcomes]
    for outcome in sink.outcomes:
        print(f"Verification {outcome.generation_tag.value}: {outcome.status.value}")
    if outcomes:
        target = out_dir / verify_file_name(file_name)
        target.write_text(serialize(outcomes, settings.export_indent), encoding="utf-8")
        print(f"Saved {target}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

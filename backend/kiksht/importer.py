from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from kiksht.database import DATA_DIR
from kiksht.parsing import (
    DictionaryParseError,
    Entry,
    annotate_lines,
    normalize,
    parse_record,
)

LOGGER = logging.getLogger(__name__)

DEFAULT_CORPUS = DATA_DIR / "dictionary-raw.txt"
DEFAULT_OUTPUT = DATA_DIR / "dictionary.json"


def split_records(content: str) -> List[List[str]]:
    """Split raw corpus text into records of trimmed, non-blank lines."""

    records: List[List[str]] = []
    current: List[str] = []
    for line in content.split("\n"):
        stripped = line.strip()
        if not stripped:
            if current:
                records.append(current)
                current = []
            continue
        current.append(stripped)

    if current:
        records.append(current)
    return records


def build_dictionary(content: str, *, skip_invalid: bool = False) -> Dict[str, Entry]:
    """Parse every record of ``content`` into a root-ordered mapping."""

    entries: Dict[str, Entry] = {}
    skipped = 0
    for index, lines in enumerate(split_records(content)):
        try:
            entry = parse_record(lines)
        except DictionaryParseError as exc:
            if not skip_invalid:
                raise
            skipped += 1
            LOGGER.warning("Skipping record %d: %s", index, exc)
            continue

        if not entry.root:
            LOGGER.debug("Record %d has an empty root, ignored", index)
            continue
        if entry.root in entries:
            LOGGER.warning("Duplicate root %r in record %d replaces earlier entry", entry.root, index)
        entries[entry.root] = entry

    if skipped:
        LOGGER.warning("Skipped %d malformed records", skipped)
    return {root: entries[root] for root in sorted(entries)}


def export_dictionary(path: Path, dictionary: Dict[str, Entry]) -> None:
    payload = {root: dictionary[root].to_dict() for root in sorted(dictionary)}
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def normalize_documents(src_dir: Path, dst_dir: Path) -> List[Path]:
    """Write the normalized text of each file in ``src_dir`` to ``dst_dir``."""

    dst_dir.mkdir(parents=True, exist_ok=True)
    written: List[Path] = []
    for path in sorted(src_dir.iterdir()):
        if not path.is_file():
            continue
        target = dst_dir / path.name
        target.write_text(normalize(path.read_text(encoding="utf-8")), encoding="utf-8")
        written.append(target)
        LOGGER.debug("Normalized %s -> %s", path, target)
    LOGGER.info("Normalized %d documents into %s", len(written), dst_dir)
    return written


def annotate_file(path: Path) -> str:
    return annotate_lines(normalize(path.read_text(encoding="utf-8")))


def _run_build(args: argparse.Namespace) -> None:
    content = args.corpus.read_text(encoding="utf-8")
    dictionary = build_dictionary(content, skip_invalid=args.skip_invalid)
    LOGGER.info("Parsed %d entries from %s", len(dictionary), args.corpus)

    export_dictionary(args.output, dictionary)
    LOGGER.info("Saved dictionary to %s", args.output)

    if args.store:
        from kiksht.database import SessionLocal, init_db
        from kiksht.services.dictionary import DictionaryService

        init_db()
        with SessionLocal() as session:
            DictionaryService(session).store_entries(
                dictionary.values(),
                truncate=not args.no_truncate,
            )


def _run_normalize(args: argparse.Namespace) -> None:
    normalize_documents(args.src_dir, args.dst_dir)


def _run_annotate(args: argparse.Namespace) -> None:
    markup = annotate_file(args.document)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(markup, encoding="utf-8")
        LOGGER.info("Saved annotated text to %s", args.output)
    else:
        print(markup)


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build the Kiksht dictionary and annotate analysed texts.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Parse the raw corpus into dictionary JSON")
    build.add_argument(
        "--corpus",
        type=Path,
        default=DEFAULT_CORPUS,
        help="Raw dictionary text (default: %(default)s)",
    )
    build.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT,
        help="Where to write the JSON dictionary (default: %(default)s)",
    )
    build.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Log and skip malformed records instead of aborting.",
    )
    build.add_argument(
        "--store",
        action="store_true",
        help="Also store the entries in the database.",
    )
    build.add_argument(
        "--no-truncate",
        action="store_true",
        help="Update stored entries instead of replacing the table.",
    )
    build.set_defaults(handler=_run_build)

    normalize_cmd = subparsers.add_parser("normalize", help="Repair the orthography of documents")
    normalize_cmd.add_argument("src_dir", type=Path, help="Directory with raw documents")
    normalize_cmd.add_argument("dst_dir", type=Path, help="Directory for normalized documents")
    normalize_cmd.set_defaults(handler=_run_normalize)

    annotate_cmd = subparsers.add_parser("annotate", help="Render reference tags as subscripts")
    annotate_cmd.add_argument("document", type=Path, help="Analysed text to annotate")
    annotate_cmd.add_argument("--output", type=Path, help="Optional file for the markup")
    annotate_cmd.set_defaults(handler=_run_annotate)

    return parser.parse_args(argv)


def main(argv: Optional[Iterable[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if not args.verbose else logging.DEBUG,
        format="%(levelname)s %(message)s",
    )
    args.handler(args)


if __name__ == "__main__":
    main()

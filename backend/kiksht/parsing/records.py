"""Parsing of raw dictionary records into :class:`Entry` values."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .entries import BilingualPair, Entry, EntryBuilder, PartOfSpeech
from .errors import MalformedHeaderError, UnrecognizedLineError
from .normalization import normalize

LOGGER = logging.getLogger(__name__)

OPEN_QUOTE = "“"
CLOSE_QUOTE = "”"


class FieldLabel(str, Enum):
    FORMS = "Forms:"
    EXAMPLES = "Examples:"
    SEE_ALSO = "See also:"
    NOTES = "Notes:"
    PRONUNCIATION = "Pronunciation:"


@dataclass(frozen=True)
class RecordLine:
    """A body line split into its label and the text after it.

    ``label`` is ``None`` when the line starts with no known label.
    """

    raw: str
    label: Optional[FieldLabel]
    body: str


def classify_line(line: str) -> RecordLine:
    stripped = line.strip()
    for label in FieldLabel:
        if stripped.startswith(label.value):
            return RecordLine(raw=line, label=label, body=stripped[len(label.value):])
    return RecordLine(raw=line, label=None, body=stripped)


def parse_header(line: str) -> Tuple[str, PartOfSpeech, str]:
    """Split ``root[tag]definition`` into normalized root, tag and definition."""

    open_pos = line.find("[")
    close_pos = line.find("]")
    if open_pos == -1 or close_pos == -1 or close_pos < open_pos:
        raise MalformedHeaderError("Missing part of speech brackets", line)

    tag = line[open_pos + 1:close_pos]
    part_of_speech = PartOfSpeech.from_tag(tag)
    if part_of_speech is None:
        raise MalformedHeaderError(f"Unknown part of speech {tag!r}", line)

    return normalize(line[:open_pos]), part_of_speech, normalize(line[close_pos + 1:])


class _ScanState(Enum):
    SOURCE = "source"
    GLOSS = "gloss"
    TRAILER = "trailer"


def extract_pairs(text: str) -> List[BilingualPair]:
    """Extract ``source “gloss” [note]`` pairs from a Forms/Examples body.

    Text after a closing quote up to the last ``]`` before the next opening
    quote is an editorial note and belongs to the gloss; whatever follows
    that bracket is the source text of the next pair. After the final pair
    the whole trailer is part of the gloss. An unterminated pair is dropped.
    """

    pairs: List[BilingualPair] = []
    state = _ScanState.SOURCE
    source = ""
    gloss = ""
    trailer = ""
    note_end = -1

    for char in text:
        if state is _ScanState.SOURCE:
            if char == OPEN_QUOTE:
                state = _ScanState.GLOSS
                gloss = ""
            else:
                source += char
        elif state is _ScanState.GLOSS:
            if char == CLOSE_QUOTE:
                state = _ScanState.TRAILER
                trailer = ""
                note_end = -1
            else:
                gloss += char
        else:
            if char == OPEN_QUOTE:
                note = trailer[:note_end + 1]
                pairs.append(BilingualPair(normalize(source), normalize(gloss + note)))
                source = trailer[note_end + 1:]
                gloss = ""
                state = _ScanState.GLOSS
                continue
            trailer += char
            if char == "]":
                note_end = len(trailer) - 1

    if state is _ScanState.TRAILER:
        pairs.append(BilingualPair(normalize(source), normalize(gloss + trailer)))

    return pairs


def parse_record(lines: Sequence[str]) -> Entry:
    """Parse the trimmed, non-blank lines of one record."""

    if not lines:
        raise MalformedHeaderError("Empty record", "")

    root, part_of_speech, definition = parse_header(lines[0].strip())
    builder = EntryBuilder(root=root, part_of_speech=part_of_speech, definition=definition)

    for line in lines[1:]:
        record_line = classify_line(line)
        label = record_line.label
        if label is None:
            raise UnrecognizedLineError("Unrecognized record line", line)

        if label is FieldLabel.FORMS:
            if builder.set_forms(extract_pairs(record_line.body)):
                LOGGER.warning("Duplicate Forms line in %r replaces earlier forms", root)
        elif label is FieldLabel.EXAMPLES:
            builder.add_examples(extract_pairs(record_line.body))
        elif label is FieldLabel.SEE_ALSO:
            builder.add_see_also(normalize(record_line.body))
        elif label is FieldLabel.NOTES:
            builder.add_note(normalize(record_line.body))
        elif label is FieldLabel.PRONUNCIATION:
            if builder.set_pronunciation(normalize(record_line.body)):
                LOGGER.warning("Duplicate Pronunciation line in %r replaces earlier value", root)

    return builder.build()


def _render_pairs(pairs: Sequence[BilingualPair]) -> str:
    return " ".join(
        f"{pair.source_text} {OPEN_QUOTE}{pair.gloss_text}{CLOSE_QUOTE}".strip()
        for pair in pairs
    )


def format_record(entry: Entry) -> List[str]:
    """Render ``entry`` as record lines that :func:`parse_record` accepts."""

    lines = [f"{entry.root}[{entry.part_of_speech.value}] {entry.definition}".rstrip()]
    if entry.forms is not None:
        lines.append(f"{FieldLabel.FORMS.value} {_render_pairs(entry.forms)}".rstrip())
    if entry.examples is not None:
        lines.append(f"{FieldLabel.EXAMPLES.value} {_render_pairs(entry.examples)}".rstrip())
    for target in entry.see_also or ():
        lines.append(f"{FieldLabel.SEE_ALSO.value} {target}".rstrip())
    for note in entry.notes or ():
        lines.append(f"{FieldLabel.NOTES.value} {note}".rstrip())
    if entry.pronunciation is not None:
        lines.append(f"{FieldLabel.PRONUNCIATION.value} {entry.pronunciation}".rstrip())
    return lines

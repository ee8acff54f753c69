"""Subscript rendering of morpheme reference tags in analysed texts."""

from __future__ import annotations

import re
from typing import List

from .errors import InvalidGlossTagError

WORD_SEPARATOR = "&nbsp; "

WORD_SPLIT_PATTERN = re.compile(r",?\s+")
STRIPPED_CHARS_PATTERN = re.compile(r"[-+/]")
# Lazy prefix, then ``<digits>R``, ``<digits>`` or a reflexive ``R``.
REFERENCE_PATTERN = re.compile(r".+?([0-9]+R|[0-9]+|R)")


def annotate_word(word: str) -> str:
    word = STRIPPED_CHARS_PATTERN.sub("", word)
    matches = list(REFERENCE_PATTERN.finditer(word))
    if not matches:
        return word

    pieces: List[str] = []
    for match in matches:
        tag = match.group(1)
        if not match.group(0) or tag == "R":
            # A lone ``R`` is an ordinary capital letter, not a reflexive marker.
            raise InvalidGlossTagError(f"Invalid reference tag {tag!r}", word)
        prefix = match.group(0)[: -len(tag)]
        pieces.append(f"{prefix}<sub>{tag}</sub>")
    pieces.append(word[matches[-1].end():])
    return "".join(pieces)


def annotate(text: str) -> str:
    """Rewrite reference tags of every word of ``text`` as ``<sub>`` markup.

    Words are joined with a non-breaking separator so a word and its
    subscripts stay on one display line.
    """

    return WORD_SEPARATOR.join(annotate_word(word) for word in WORD_SPLIT_PATTERN.split(text))


def annotate_lines(text: str) -> str:
    """Annotate a multi-line document line by line."""

    return "\n".join(annotate(line.strip()) for line in text.split("\n"))

"""Repair of corrupted orthography in the source documents."""

from __future__ import annotations

from typing import Iterable, Tuple

SubstitutionTable = Tuple[Tuple[str, str], ...]

UNDERLINE = "\u0332"


def build_substitution_table(pairs: Iterable[Tuple[str, str]]) -> SubstitutionTable:
    """Freeze ``pairs`` into an ordered table.

    Identical pairs are kept once. A pattern bound to two replacements, or a
    replacement that contains one of the patterns, is rejected so that
    applying the table twice never changes the result of applying it once.
    """

    table: list[Tuple[str, str]] = []
    seen: dict[str, str] = {}
    for pattern, replacement in pairs:
        if not pattern:
            raise ValueError("Empty substitution pattern")
        if pattern in seen:
            if seen[pattern] != replacement:
                raise ValueError(
                    f"Conflicting replacements for {pattern!r}: "
                    f"{seen[pattern]!r} and {replacement!r}"
                )
            continue
        seen[pattern] = replacement
        table.append((pattern, replacement))

    for _, replacement in table:
        for pattern in seen:
            if pattern in replacement:
                raise ValueError(
                    f"Replacement {replacement!r} re-matches pattern {pattern!r}"
                )
    return tuple(table)


# Mac Roman mojibake of the Kiksht orthography comes first, then typographic
# apostrophes and quotes. Visually identical patterns are distinct codepoint
# sequences (precomposed vs. base letter + combining mark).
SUBSTITUTIONS = build_substitution_table(
    [
        ("\u00d2", "\u0141"),
        ("O\u0300", "\u0141"),
        ("\u00ac", "\u0142"),
        ("A\u030a", "\u00e1"),
        ("\u00c5", "\u00e1"),
        ("\u00e5", "\u00e4"),
        (" \u0308", "\u00fa"),
        ("\u00a8", "\u00fa"),
        ("\u030b", "G" + UNDERLINE),
        ("\u00a9", "g" + UNDERLINE),
        (" \u0328", "X" + UNDERLINE),
        ("\u2248", "x" + UNDERLINE),
        ("\u02c6", "\u00ed"),
        ("\u2019", "'"),
        ("\u2018", "'"),
        ("\u201c", '"'),
        ("\u201d", '"'),
    ]
)


def normalize(text: str) -> str:
    """Trim ``text`` and apply every substitution in table order."""
    result = text.strip()
    for pattern, replacement in SUBSTITUTIONS:
        result = result.replace(pattern, replacement)
    return result

"""Errors raised by the dictionary and gloss parsers."""

from __future__ import annotations


class DictionaryParseError(ValueError):
    """Base class for unrecoverable parse failures.

    ``line`` holds the literal text that could not be processed.
    """

    def __init__(self, message: str, line: str) -> None:
        super().__init__(f"{message}: {line}")
        self.line = line


class MalformedHeaderError(DictionaryParseError):
    """The first line of a record lacks ``[tag]`` or uses an unknown tag."""


class UnrecognizedLineError(DictionaryParseError):
    """A record line does not start with any known field label."""


class InvalidGlossTagError(DictionaryParseError):
    """A morpheme reference tag matched a bare trailing letter."""

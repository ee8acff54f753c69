"""Parsers for the raw dictionary corpus and analysed texts."""

from .entries import BilingualPair, Entry, EntryBuilder, PartOfSpeech
from .errors import (
    DictionaryParseError,
    InvalidGlossTagError,
    MalformedHeaderError,
    UnrecognizedLineError,
)
from .gloss import annotate, annotate_lines
from .normalization import normalize
from .records import extract_pairs, format_record, parse_record

__all__ = [
    "BilingualPair",
    "DictionaryParseError",
    "Entry",
    "EntryBuilder",
    "InvalidGlossTagError",
    "MalformedHeaderError",
    "PartOfSpeech",
    "UnrecognizedLineError",
    "annotate",
    "annotate_lines",
    "extract_pairs",
    "format_record",
    "normalize",
    "parse_record",
]

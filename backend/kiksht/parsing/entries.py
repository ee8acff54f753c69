"""Structured dictionary entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple


class PartOfSpeech(str, Enum):
    NOUN = "n"
    PRONOUN = "pron"
    VERB = "vb"
    ADVERB = "adv"
    PARTICLE = "part"
    INTERJECTION = "interj"
    PLACENAME = "place"
    RELATIONAL = "rel"

    @classmethod
    def from_tag(cls, tag: str) -> Optional["PartOfSpeech"]:
        try:
            return cls(tag)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class BilingualPair:
    """A Kiksht phrase and its English gloss (form or example)."""

    source_text: str
    gloss_text: str

    def to_dict(self) -> Dict[str, str]:
        return {"kiksht": self.source_text, "english": self.gloss_text}

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "BilingualPair":
        return cls(source_text=data["kiksht"], gloss_text=data["english"])


# Optional fields in the order they are serialized and rendered.
OPTIONAL_FIELDS: Tuple[str, ...] = ("forms", "examples", "see_also", "notes", "pronunciation")

_JSON_KEYS = {
    "forms": "forms",
    "examples": "examples",
    "see_also": "seeAlso",
    "notes": "notes",
    "pronunciation": "pronunciation",
}


@dataclass(frozen=True, slots=True)
class Entry:
    """One parsed dictionary record.

    Optional fields are ``None`` when the record had no line for them.
    """

    root: str
    part_of_speech: PartOfSpeech
    definition: str
    forms: Optional[Tuple[BilingualPair, ...]] = None
    examples: Optional[Tuple[BilingualPair, ...]] = None
    notes: Optional[Tuple[str, ...]] = None
    see_also: Optional[Tuple[str, ...]] = None
    pronunciation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON interchange shape of the entry."""

        data: Dict[str, Any] = {
            "root": self.root,
            "partOfSpeech": self.part_of_speech.value,
            "definition": self.definition,
        }
        for name in OPTIONAL_FIELDS:
            value = getattr(self, name)
            if value is None:
                continue
            if name in ("forms", "examples"):
                value = [pair.to_dict() for pair in value]
            elif isinstance(value, tuple):
                value = list(value)
            data[_JSON_KEYS[name]] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Entry":
        part_of_speech = PartOfSpeech.from_tag(data.get("partOfSpeech", ""))
        if part_of_speech is None:
            raise ValueError(f"Unknown part of speech: {data.get('partOfSpeech')!r}")

        def _pairs(key: str) -> Optional[Tuple[BilingualPair, ...]]:
            items = data.get(key)
            if items is None:
                return None
            return tuple(BilingualPair.from_dict(item) for item in items)

        def _strings(key: str) -> Optional[Tuple[str, ...]]:
            items = data.get(key)
            return None if items is None else tuple(items)

        return cls(
            root=data["root"],
            part_of_speech=part_of_speech,
            definition=data.get("definition", ""),
            forms=_pairs("forms"),
            examples=_pairs("examples"),
            notes=_strings("notes"),
            see_also=_strings("seeAlso"),
            pronunciation=data.get("pronunciation"),
        )


@dataclass
class EntryBuilder:
    """Accumulates the fields of one record, line by line."""

    root: str
    part_of_speech: PartOfSpeech
    definition: str
    populated: Set[str] = field(default_factory=set, init=False)
    _forms: List[BilingualPair] = field(default_factory=list, init=False)
    _examples: List[BilingualPair] = field(default_factory=list, init=False)
    _notes: List[str] = field(default_factory=list, init=False)
    _see_also: List[str] = field(default_factory=list, init=False)
    _pronunciation: str = field(default="", init=False)

    def set_forms(self, forms: Iterable[BilingualPair]) -> bool:
        """Replace the forms; return True when earlier forms were discarded."""
        replaced = "forms" in self.populated
        self._forms = list(forms)
        self.populated.add("forms")
        return replaced

    def add_examples(self, examples: Iterable[BilingualPair]) -> None:
        self._examples.extend(examples)
        self.populated.add("examples")

    def add_note(self, note: str) -> None:
        self._notes.append(note)
        self.populated.add("notes")

    def add_see_also(self, target: str) -> None:
        self._see_also.append(target)
        self.populated.add("see_also")

    def set_pronunciation(self, pronunciation: str) -> bool:
        """Replace the pronunciation; return True when one was already set."""
        replaced = "pronunciation" in self.populated
        self._pronunciation = pronunciation
        self.populated.add("pronunciation")
        return replaced

    def build(self) -> Entry:
        def _if_populated(name: str, value: Any) -> Any:
            return value if name in self.populated else None

        return Entry(
            root=self.root,
            part_of_speech=self.part_of_speech,
            definition=self.definition,
            forms=_if_populated("forms", tuple(self._forms)),
            examples=_if_populated("examples", tuple(self._examples)),
            notes=_if_populated("notes", tuple(self._notes)),
            see_also=_if_populated("see_also", tuple(self._see_also)),
            pronunciation=_if_populated("pronunciation", self._pronunciation),
        )

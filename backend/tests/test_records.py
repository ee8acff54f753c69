import logging

import pytest

from kiksht.parsing import (
    BilingualPair,
    Entry,
    MalformedHeaderError,
    PartOfSpeech,
    UnrecognizedLineError,
    extract_pairs,
    format_record,
    parse_record,
)
from kiksht.parsing.records import FieldLabel, classify_line, parse_header


def test_header_splits_root_tag_and_definition():
    assert parse_header("alpha[vb]to go") == ("alpha", PartOfSpeech.VERB, "to go")


def test_header_normalizes_root_and_definition():
    root, _, definition = parse_header(" ©a¬ [n] it’s a house ")
    assert root == "g̲ał"
    assert definition == "it's a house"


@pytest.mark.parametrize("line", ["alpha vb to go", "alpha[vb to go", "alpha]vb[ to go"])
def test_header_without_brackets_is_malformed(line):
    with pytest.raises(MalformedHeaderError) as excinfo:
        parse_header(line)
    assert excinfo.value.line == line


def test_header_with_unknown_tag_is_malformed():
    with pytest.raises(MalformedHeaderError):
        parse_header("alpha[adj]big")


def test_classify_line_recognizes_labels():
    line = classify_line("See also: itkwa")
    assert line.label is FieldLabel.SEE_ALSO
    assert line.body == " itkwa"

    unknown = classify_line("Synonym: foo")
    assert unknown.label is None
    assert unknown.raw == "Synonym: foo"


def test_record_with_folded_note_in_last_example():
    entry = parse_record(["alpha[vb]to go", "Examples: alpha-ti “I go” [lit. I-go]"])
    assert entry.root == "alpha"
    assert entry.part_of_speech is PartOfSpeech.VERB
    assert entry.definition == "to go"
    assert entry.examples == (BilingualPair("alpha-ti", "I go [lit. I-go]"),)
    assert entry.forms is None
    assert entry.notes is None
    assert entry.see_also is None
    assert entry.pronunciation is None


def test_note_before_next_quote_stays_with_its_pair():
    pairs = extract_pairs(" a “one” [note] b “two”")
    assert pairs == [BilingualPair("a", "one [note]"), BilingualPair("b", "two")]


def test_last_bracket_before_next_quote_wins():
    pairs = extract_pairs("a “one” [x [y]] z] b “two” [c]")
    assert pairs == [
        BilingualPair("a", "one [x [y]] z]"),
        BilingualPair("b", "two [c]"),
    ]


def test_pair_without_note_keeps_quoted_gloss_only():
    pairs = extract_pairs("a “one”, b “two”")
    assert pairs == [BilingualPair("a", "one"), BilingualPair(", b", "two")]


def test_unclosed_quote_yields_no_pairs():
    assert extract_pairs("a “one") == []


def test_trailing_text_without_quotes_is_dropped():
    assert extract_pairs("just text") == []


def test_unterminated_second_pair_is_dropped():
    pairs = extract_pairs("a “one” [n] b “two")
    assert pairs == [BilingualPair("a", "one [n]")]


def test_pairs_are_normalized():
    pairs = extract_pairs("i¬a “it’s” ")
    assert pairs == [BilingualPair("iła", "it's")]


def test_repeatable_labels_accumulate():
    entry = parse_record(
        [
            "itkwa[n]house",
            "Examples: a “one”",
            "Examples: b “two”",
            "Notes: first",
            "Notes: second",
            "See also: ikwa",
            "See also: ilikwa",
        ]
    )
    assert entry.examples == (BilingualPair("a", "one"), BilingualPair("b", "two"))
    assert entry.notes == ("first", "second")
    assert entry.see_also == ("ikwa", "ilikwa")


def test_forms_and_pronunciation_overwrite_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="kiksht.parsing.records"):
        entry = parse_record(
            [
                "itkwa[n]house",
                "Forms: a “one”",
                "Forms: b “two”",
                "Pronunciation: it-kwa",
                "Pronunciation: itk-wa",
            ]
        )
    assert entry.forms == (BilingualPair("b", "two"),)
    assert entry.pronunciation == "itk-wa"
    assert len(caplog.records) == 2


def test_unrecognized_line_is_fatal():
    with pytest.raises(UnrecognizedLineError) as excinfo:
        parse_record(["alpha[vb]to go", "Synonym: foo"])
    assert excinfo.value.line == "Synonym: foo"
    assert "Synonym: foo" in str(excinfo.value)


def test_empty_record_is_malformed():
    with pytest.raises(MalformedHeaderError):
        parse_record([])


def test_empty_examples_line_marks_field_present():
    entry = parse_record(["alpha[vb]to go", "Examples:"])
    assert entry.examples == ()


def test_format_record_round_trip():
    entry = parse_record(
        [
            "ik’ani[interj]wow",
            "Forms: ik’ani-x “wow!” [emphatic]",
            "Examples: a “one” [note] b “two”",
            "See also: ikani",
            "Notes: used by elders",
            "Pronunciation: ik-ani",
        ]
    )
    lines = format_record(entry)
    assert lines[0] == "ik'ani[interj] wow"
    assert parse_record(lines) == entry


def test_entry_dict_round_trip():
    entry = parse_record(["alpha[vb]to go", "Examples: alpha-ti “I go”", "Notes: n"])
    data = entry.to_dict()
    assert data == {
        "root": "alpha",
        "partOfSpeech": "vb",
        "definition": "to go",
        "examples": [{"kiksht": "alpha-ti", "english": "I go"}],
        "notes": ["n"],
    }
    assert Entry.from_dict(data) == entry

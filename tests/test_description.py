import pytest

from sapf.catalog.description import (
    DescriptionParts,
    entry_from_raw,
    scan_signature,
    scan_special,
    split_description,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("@k (a b --> c) does X", DescriptionParts("k", "(a b --> c)", "does X")),
        ("(a --> b) plain desc", DescriptionParts(None, "(a --> b)", "plain desc")),
        ("just text", DescriptionParts(None, None, "just text")),
        ("@kk(freq phase --> out) osc", DescriptionParts("kk", "(freq phase --> out)", "osc")),
        ("(... -->) clear", DescriptionParts(None, "(... -->)", "clear")),
        ("(n --> out)", DescriptionParts(None, "(n --> out)", "")),
        ("@ak", DescriptionParts("ak", None, "")),
        ("", DescriptionParts(None, None, "")),
        ("   padded text  ", DescriptionParts(None, None, "padded text")),
    ]
)
def test_split_description(raw, expected):
    assert split_description(raw) == expected


@pytest.mark.parametrize(
    "raw,expected",
    [
        # upper-case tags are not special annotations
        ("@K (a --> b) x", DescriptionParts(None, None, "@K (a --> b) x")),
        # parentheses without an arrow are not a signature
        ("(see below) text", DescriptionParts(None, None, "(see below) text")),
        # unclosed signature
        ("(a --> b text", DescriptionParts(None, None, "(a --> b text")),
        # a signature must come first
        ("text (a --> b)", DescriptionParts(None, None, "text (a --> b)")),
        # tag followed by free text
        ("@k not a signature", DescriptionParts("k", None, "not a signature")),
    ]
)
def test_split_description_unmatched_groups(raw, expected):
    assert split_description(raw) == expected


def test_scanners_leave_position_on_failure():
    assert scan_special("x@k", 0) is None
    assert scan_special("@", 0) is None
    assert scan_special("@ka  (", 0) == ("ka", 5)
    assert scan_signature("(a b)", 0) is None
    assert scan_signature("x (a --> b) y", 2) == ("(a --> b)", 12)


def test_entry_from_raw():
    entry = entry_from_raw("sinosc", "@kk (freq phase --> out) a sine wave oscillator.", "oscillators")
    assert entry.name == "sinosc"
    assert entry.special == "kk"
    assert entry.signature == "(freq phase --> out)"
    assert entry.description == "a sine wave oscillator."
    assert entry.category == "oscillators"
    assert entry.raw_description == "@kk (freq phase --> out) a sine wave oscillator."
    assert entry.display_signature == "sinosc kk (freq phase --> out)"


def test_raw_description_resplits_to_same_parts():
    for raw in ["@k (a --> b) x", "(a --> b)", "plain", "@ak"]:
        entry = entry_from_raw("f", raw, "c")
        assert entry_from_raw("f", entry.raw_description, "c") == entry


def test_display_signature_without_signature():
    entry = entry_from_raw("pi", "the constant pi.", "math")
    assert entry.display_signature == "pi (no signature)"

import json

import pytest

from sapf.catalog.help_parser import parse_help_output
from sapf.catalog.keyword_index import KeywordIndex
from sapf.catalog.storage import load_catalog, load_keyword_index, load_language_data, save_language_data
from sapf.config import DEFAULT_LANGUAGE_FILE


def test_index_is_keyed_by_lower_case_name(help_output):
    index = KeywordIndex.from_catalog(parse_help_output(help_output))
    assert "dup" in index
    assert index.lookup("DUP").name == "dup"
    assert index.lookup("missing") is None
    assert len(index) == 9


def test_index_preserves_case_of_names():
    index = KeywordIndex.from_language_data({"lists": {"items": {"N": "@ka (list n --> list) take n"}}})
    entry = index.lookup("n")
    assert entry.name == "N"
    assert entry.special == "ka"
    assert entry.category == "lists"


def test_names_equal_up_to_case_share_a_key(caplog):
    data = {
        "A": {"items": {"N": "(a --> b) one"}},
        "B": {"items": {"n": "(a --> b) two"}},
    }
    with caplog.at_level("DEBUG", logger="sapf.catalog.keyword_index"):
        index = KeywordIndex.from_language_data(data)
    assert len(index) == 1
    assert index.lookup("n").category == "B"
    assert index.lookup("N").description == "two"
    assert "shadows" in caplog.text


def test_complete(help_output):
    index = KeywordIndex.from_catalog(parse_help_output(help_output))
    assert [e.name for e in index.complete("d")] == ["dup", "drop"]
    assert [e.name for e in index.complete("D")] == ["dup", "drop"]
    assert len(index.complete("")) == len(index)
    assert index.complete("zzz") == []


def test_index_is_read_only(help_output):
    index = KeywordIndex.from_catalog(parse_help_output(help_output))
    with pytest.raises(TypeError):
        index["dup"] = None


def test_fresh_and_reloaded_indexes_are_equal(help_output, tmp_path):
    catalog = parse_help_output(help_output)
    path = save_language_data(catalog, tmp_path / "language-local.json")
    fresh = KeywordIndex.from_catalog(catalog)
    reloaded = KeywordIndex.from_language_data(load_language_data(path))
    assert dict(fresh) == dict(reloaded)


def test_saved_wire_format(help_output, tmp_path):
    path = save_language_data(parse_help_output(help_output), tmp_path / "out" / "language.json")
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["math functions"]["items"]["add"] == "@ak (a b --> c) addition."
    assert data["stack manipulation functions"]["items"]["drop"] == "(a -->) remove the top item on the stack."
    assert not (tmp_path / "out" / "language.json.tmp").exists()


def test_bundled_definitions_load():
    index = load_keyword_index(None)
    assert len(index) > 0
    assert index.lookup("sinosc").signature == "(freq phase --> out)"
    assert DEFAULT_LANGUAGE_FILE.is_file()


def test_local_definitions_take_precedence(tmp_path):
    local = tmp_path / "language-local.json"
    local.write_text(json.dumps({"Mine": {"items": {"zap": "(a --> b) mine"}}}), encoding="utf-8")
    index = load_keyword_index(local)
    assert list(index) == ["zap"]


@pytest.mark.parametrize("content", ["{not json", "[1, 2]", '{"Cat": "oops"}'])
def test_invalid_local_definitions_fall_back(tmp_path, caplog, content):
    local = tmp_path / "language-local.json"
    local.write_text(content, encoding="utf-8")
    with caplog.at_level("WARNING"):
        catalog = load_catalog(local)
    assert catalog == load_catalog(None)
    assert "falling back" in caplog.text


def test_missing_local_definitions_use_default(tmp_path):
    assert load_catalog(tmp_path / "nope.json") == load_catalog(None)

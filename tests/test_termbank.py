"""Tests for term-bank parsing and dictionary loading."""

import asyncio
import json
import zipfile

import pytest

from lookup.dictionary import InMemoryDictionaryIndex
from lookup.termbank import (
    TermBankError,
    extract_glossary,
    extract_part_of_speech,
    iter_term_banks,
    load_dictionary,
    needs_reload,
    parse_term_bank_entry,
)


STRUCTURED = {
    "type": "structured-content",
    "content": [
        {
            "tag": "ul",
            "content": [
                {"tag": "li", "content": "to eat"},
                {"tag": "li", "content": {"tag": "span", "content": "to live on"}},
            ],
        },
        {
            "tag": "div",
            "data": {"content": "references"},
            "content": ["See also ", {"tag": "a", "content": "食う"}],
        },
    ],
}


def test_plain_string_definition():
    assert extract_glossary("to eat") == ["to eat"]


def test_text_definition():
    assert extract_glossary({"type": "text", "text": "to eat"}) == ["to eat"]


def test_structured_content_skips_references():
    assert extract_glossary(STRUCTURED) == ["to eat", "to live on"]


def test_unknown_definition_yields_nothing():
    assert extract_glossary({"type": "image", "path": "x.png"}) == []
    assert extract_glossary(42) == []


def test_part_of_speech_mapping():
    assert extract_part_of_speech("1 v1 vt") == ["ichidan verb", "transitive"]
    assert extract_part_of_speech("v5k-s unknown") == []
    assert extract_part_of_speech("") == []


def test_parse_entry():
    entry = parse_term_bank_entry(["食べる", "たべる", "v1 vt", "v1", 500, [STRUCTURED], 1358280, ""])

    assert entry.term == "食べる"
    assert entry.reading == "たべる"
    assert entry.rules == "v1"
    assert entry.score == 500
    assert entry.sequence == 1358280
    assert entry.definitions[0].glossary == ["to eat", "to live on"]
    assert entry.definitions[0].part_of_speech == ["ichidan verb", "transitive"]


def test_missing_reading_falls_back_to_term():
    entry = parse_term_bank_entry(["する", "", "vs-i", "vs", 0, ["to do"], 1157170])
    assert entry.reading == "する"


def test_form_stubs_are_skipped():
    assert parse_term_bank_entry(["喰べる", "たべる", "forms", "", 0, ["食べる"], 1358280]) is None


def test_rows_without_glossary_are_skipped():
    assert parse_term_bank_entry(["x", "x", "n", "", 0, [{"type": "image"}], 1]) is None
    assert parse_term_bank_entry(["x", "x", "n", "", 0, [], 1]) is None


def test_short_row_is_rejected():
    with pytest.raises(TermBankError):
        parse_term_bank_entry(["食べる", "たべる", "v1"])


def _write_dictionary(root, revision="jmdict.2025-01-01"):
    root.mkdir(parents=True, exist_ok=True)
    (root / "index.json").write_text(
        json.dumps({"title": "JMdict", "revision": revision, "format": 3}), encoding="utf-8"
    )
    banks = {
        "term_bank_1.json": [["食べる", "たべる", "v1", "v1", 100, ["to eat"], 1]],
        "term_bank_2.json": [
            ["読む", "よむ", "v5m", "v5", 90, ["to read"], 2],
            ["読む", "よむ", "forms", "", 0, ["讀む"], 2],
        ],
        "term_bank_10.json": [["日本", "にほん", "n", "", 70, ["Japan"], 3]],
    }
    for name, rows in banks.items():
        (root / name).write_text(json.dumps(rows, ensure_ascii=False), encoding="utf-8")
    return root


def test_load_dictionary_from_directory(tmp_path):
    path = _write_dictionary(tmp_path / "jmdict_english")
    index = load_dictionary(path)

    assert len(index) == 3
    assert index.version == "jmdict.2025-01-01"
    assert [name for name, _ in iter_term_banks(path)] == [
        "term_bank_1.json", "term_bank_2.json", "term_bank_10.json",
    ]
    entries = asyncio.run(index.lookup_by_term_or_reading("よむ"))
    assert [e.term for e in entries] == ["読む"]


def test_load_dictionary_from_zip(tmp_path):
    source = _write_dictionary(tmp_path / "src")
    archive = tmp_path / "jmdict_english.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        for file in source.iterdir():
            zf.write(file, file.name)

    index = load_dictionary(archive)

    assert len(index) == 3
    assert index.lookup_by_term("日本")[0].definitions[0].glossary == ["Japan"]


def test_reload_replaces_previous_contents(tmp_path):
    path = _write_dictionary(tmp_path / "dict")
    index = load_dictionary(path)
    load_dictionary(path, index)
    assert len(index) == 3


def test_needs_reload(tmp_path):
    path = _write_dictionary(tmp_path / "dict")
    index = load_dictionary(path)
    assert not needs_reload(index, path)

    _write_dictionary(path, revision="jmdict.2025-06-01")
    assert needs_reload(index, path)


def test_missing_dictionary(tmp_path):
    with pytest.raises(TermBankError):
        load_dictionary(tmp_path / "nowhere")


def test_needs_reload_when_nothing_loaded(tmp_path):
    path = _write_dictionary(tmp_path / "dict")
    assert needs_reload(InMemoryDictionaryIndex(), path)


@pytest.mark.parametrize(
    "bank",
    [
        '[["x", "x", "n"]]',
        "[not json",
        '[["x", "x", "n", "", 0, ["gloss"], "seq"]]',
    ],
    ids=["short-row", "bad-json", "bad-sequence"],
)
def test_failed_load_leaves_index_untouched(tmp_path, bank):
    path = _write_dictionary(tmp_path / "dict")
    index = load_dictionary(path)

    (path / "term_bank_11.json").write_text(bank, encoding="utf-8")
    with pytest.raises(TermBankError):
        load_dictionary(path, index)

    assert len(index) == 3
    assert index.version == "jmdict.2025-01-01"
    assert index.lookup_by_term("日本")


def test_failed_first_load_leaves_index_unloaded(tmp_path):
    path = _write_dictionary(tmp_path / "dict")
    (path / "term_bank_11.json").write_text("[not json", encoding="utf-8")

    index = InMemoryDictionaryIndex()
    with pytest.raises(TermBankError):
        load_dictionary(path, index)

    assert not index.is_loaded
    assert len(index) == 0
    assert index.version is None


def test_corrupt_zip_is_rejected(tmp_path):
    archive = tmp_path / "jmdict_english.zip"
    archive.write_bytes(b"not a zip")
    with pytest.raises(TermBankError):
        load_dictionary(archive)

"""Tests for looking up the word under a click position."""

import asyncio

import pytest

from lookup.tokenizer import lookup_at_position

from conftest import FakeTokenizer


def test_lookup_uses_base_form_and_reading(index):
    tokenizer = FakeTokenizer([("私", "私", "わたし"), ("は", "は", "は"), ("食べない", "食べる", "たべない"), ("。", "。", "")])
    token, results = asyncio.run(lookup_at_position(index, tokenizer, "私は食べない。", 3))

    assert token.surface == "食べない"
    assert results[0].dictionary_form == "食べる"
    assert results[0].selected_word == "食べる"


def test_offset_is_relative_to_sentence(index):
    tokenizer = FakeTokenizer([("日本", "日本", "にほん")])
    asyncio.run(lookup_at_position(index, tokenizer, "はい。日本", 4))
    assert tokenizer.calls == [("日本", 1)]


def test_unknown_base_form_falls_back_to_surface(index):
    tokenizer = FakeTokenizer([("日本語", "*", "にほんご")])
    _, results = asyncio.run(lookup_at_position(index, tokenizer, "日本語", 0))
    assert results[0].dictionary_form == "日本語"


def test_non_japanese_token_is_ignored(index):
    tokenizer = FakeTokenizer([("abc", "abc", "")])
    assert asyncio.run(lookup_at_position(index, tokenizer, "abc", 1)) is None


def test_offset_outside_text(index):
    tokenizer = FakeTokenizer([("日本", "日本", "にほん")])
    assert asyncio.run(lookup_at_position(index, tokenizer, "日本", 5)) is None
    assert tokenizer.calls == []


def test_sudachi_tokenizer_finds_base_form():
    pytest.importorskip("sudachidict_full")
    from lookup.tokenizer import SudachiTokenizer

    token = SudachiTokenizer().token_at("ケーキを食べなかった", 4)
    assert token.surface.startswith("食べ")
    assert token.base_form == "食べる"
    assert token.reading.startswith("たべ")

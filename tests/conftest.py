"""Shared fixtures: a small hand-built dictionary."""

import pytest

from lookup.dictionary import DictionaryDefinition, DictionaryEntry, InMemoryDictionaryIndex
from lookup.tokenizer import Token


class FakeTokenizer:
    """Tokenizes by a fixed list of (surface, base, reading) triples."""

    def __init__(self, tokens: list[tuple[str, str, str]]) -> None:
        self.tokens = tokens
        self.calls: list[tuple[str, int]] = []

    def token_at(self, sentence: str, offset: int) -> Token | None:
        self.calls.append((sentence, offset))
        start = 0
        for surface, base, reading in self.tokens:
            end = start + len(surface)
            if start <= offset < end:
                return Token(surface, base, reading, start, end)
            start = end
        return None


def make_entry(
    term: str,
    reading: str,
    sequence: int,
    rules: str = "",
    tags: str = "",
    score: int = 0,
    glosses: tuple[str, ...] = ("gloss",),
    pos: tuple[str, ...] = (),
) -> DictionaryEntry:
    return DictionaryEntry(
        term=term,
        reading=reading,
        tags=tags,
        rules=rules,
        score=score,
        sequence=sequence,
        definitions=[DictionaryDefinition(glossary=list(glosses), part_of_speech=list(pos))],
    )


@pytest.fixture
def taberu() -> DictionaryEntry:
    return make_entry("食べる", "たべる", 1001, rules="v1", tags="v1 vt", score=100,
                      glosses=("to eat",), pos=("verb",))


@pytest.fixture
def entries(taberu) -> list[DictionaryEntry]:
    return [
        taberu,
        make_entry("読む", "よむ", 1002, rules="v5", tags="v5m vt", score=90, glosses=("to read",)),
        make_entry("高い", "たかい", 1003, rules="adj-i", tags="adj-i", score=80,
                   glosses=("high", "tall", "expensive")),
        make_entry("する", "する", 1004, rules="vs", tags="vs-i", score=120, glosses=("to do",)),
        make_entry("来る", "くる", 1005, rules="vk", tags="vk vi", score=110, glosses=("to come",)),
        make_entry("日本", "にほん", 1006, tags="n", score=70, glosses=("Japan",)),
        make_entry("日本語", "にほんご", 1007, tags="n", score=60, glosses=("Japanese (language)",)),
        make_entry("語", "ご", 1008, tags="n suf", score=10, glosses=("word", "language")),
        make_entry("コーヒー", "コーヒー", 1009, tags="n", score=50, glosses=("coffee",)),
    ]


@pytest.fixture
def index(entries) -> InMemoryDictionaryIndex:
    return InMemoryDictionaryIndex(entries)

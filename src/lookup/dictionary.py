"""
Dictionary entries and the keyed index they are looked up from.

The lookup engine only needs one read operation, ``lookup_by_term_or_reading``.
Anything providing it (an in-memory index, a database-backed store) can be
passed to the resolver as a ``DictionaryIndex``.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


class DictionaryError(Exception):
    """The dictionary store failed or is unavailable."""


class DictionaryNotLoadedError(DictionaryError):
    """A lookup was attempted before any dictionary was loaded."""


@dataclass(frozen=True, slots=True)
class DictionaryDefinition:
    """One sense of an entry."""

    glossary: list[str]
    part_of_speech: list[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class DictionaryEntry:
    """A single term-bank row.

    ``tags`` and ``rules`` are space-separated tag strings as stored in the
    term bank (e.g. ``"v1 vt"``). ``sequence`` identifies the entry across
    duplicate term/reading rows.
    """

    term: str
    reading: str
    tags: str
    rules: str
    score: int
    sequence: int
    definitions: list[DictionaryDefinition] = field(default_factory=list)

    @property
    def rule_tokens(self) -> list[str]:
        return self.rules.split()

    @property
    def tag_tokens(self) -> list[str]:
        return self.tags.split()


@runtime_checkable
class DictionaryIndex(Protocol):
    """Read-only keyed store of dictionary entries."""

    async def lookup_by_term_or_reading(self, text: str) -> list[DictionaryEntry]:
        """All entries whose term or reading equals ``text``, best score first."""
        ...


def merge_by_sequence(*groups: Iterable[DictionaryEntry]) -> list[DictionaryEntry]:
    """Concatenate entry lists, keeping the first entry seen per sequence."""
    seen: set[int] = set()
    merged: list[DictionaryEntry] = []
    for group in groups:
        for entry in group:
            if entry.sequence not in seen:
                seen.add(entry.sequence)
                merged.append(entry)
    return merged


class InMemoryDictionaryIndex:
    """
    Dictionary index held in memory.

    Keeps one dict keyed by term and one keyed by reading, so both kinds of
    exact lookup are O(1).
    """

    def __init__(self, entries: Iterable[DictionaryEntry] | None = None) -> None:
        self._index_term: dict[str, list[DictionaryEntry]] = {}
        self._index_reading: dict[str, list[DictionaryEntry]] = {}
        self._count = 0
        self._loaded = False
        self.version: str | None = None

        if entries is not None:
            self.add_entries(entries)

    def add_entries(self, entries: Iterable[DictionaryEntry]) -> int:
        """Index entries. Returns how many were added."""
        added = 0
        for entry in entries:
            self._index_term.setdefault(entry.term, []).append(entry)
            self._index_reading.setdefault(entry.reading, []).append(entry)
            added += 1

        self._count += added
        self._loaded = True
        return added

    def replace_contents(self, other: "InMemoryDictionaryIndex") -> None:
        """Take over another index's entries, loaded state and version."""
        self._index_term = other._index_term
        self._index_reading = other._index_reading
        self._count = other._count
        self._loaded = other._loaded
        self.version = other.version

    def __len__(self) -> int:
        return self._count

    @property
    def is_loaded(self) -> bool:
        """Check if any dictionary data was loaded."""
        return self._loaded

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise DictionaryNotLoadedError("No dictionary has been loaded")

    def lookup_by_term(self, term: str) -> list[DictionaryEntry]:
        self._require_loaded()
        return list(self._index_term.get(term, []))

    def lookup_by_reading(self, reading: str) -> list[DictionaryEntry]:
        self._require_loaded()
        return list(self._index_reading.get(reading, []))

    async def lookup_by_term_or_reading(self, text: str) -> list[DictionaryEntry]:
        entries = merge_by_sequence(self.lookup_by_term(text), self.lookup_by_reading(text))
        entries.sort(key=lambda entry: entry.score, reverse=True)
        logger.debug("Index lookup %r -> %d entries", text, len(entries))
        return entries

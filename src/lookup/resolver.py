"""
Dictionary lookup of (possibly conjugated) Japanese words.

- lookup_word: deinflect a word and resolve every candidate in the index
- lookup_word_best: the top ranked result of lookup_word
- lookup_word_with_substrings: longest-match search from a position in
  running text, for when the word boundary is unknown
"""

import asyncio
import logging
from dataclasses import dataclass, field, replace

from lookup.config import DEFAULT_MAX_SUBSTRING_LENGTH
from lookup.deinflector import DeinflectionCandidate, deinflect
from lookup.dictionary import DictionaryEntry, DictionaryIndex
from lookup.grammar import is_compatible
from lookup.kana import contains_sentence_terminator, katakana_to_hiragana


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LookupResult:
    """A dictionary entry matched for a selected word."""

    selected_word: str
    dictionary_form: str
    reading: str
    part_of_speech: list[str]
    definitions: list[str]
    inflection_path: list[str]
    score: int
    sequence: int
    match_length: int | None = None
    tags: list[str] = field(default_factory=list)


def _to_result(selected_word: str, candidate: DeinflectionCandidate, entry: DictionaryEntry) -> LookupResult:
    """Flatten an entry's glossaries into a LookupResult."""
    definitions: list[str] = []
    for definition in entry.definitions:
        for gloss in definition.glossary:
            if gloss and gloss not in definitions:
                definitions.append(gloss)

    # Part of speech comes from the first sense
    part_of_speech = list(entry.definitions[0].part_of_speech) if entry.definitions else []

    return LookupResult(
        selected_word=selected_word,
        dictionary_form=entry.term,
        reading=entry.reading,
        part_of_speech=part_of_speech,
        definitions=definitions,
        inflection_path=list(candidate.reason_chain),
        score=entry.score,
        sequence=entry.sequence,
        tags=entry.tag_tokens,
    )


def lookup_candidates(word: str) -> list[DeinflectionCandidate]:
    """Deinflection candidates for ``word`` and its hiragana spelling."""
    candidates = deinflect(word)

    hiragana_word = katakana_to_hiragana(word)
    if hiragana_word != word:
        known = {c.term for c in candidates}
        candidates.extend(c for c in deinflect(hiragana_word) if c.term not in known)

    return candidates


async def _resolve(index: DictionaryIndex, word: str) -> list[LookupResult]:
    """Match every candidate of ``word`` against the index, unranked."""
    candidates = lookup_candidates(word)
    entry_lists = await asyncio.gather(
        *(index.lookup_by_term_or_reading(c.term) for c in candidates)
    )

    results: list[LookupResult] = []
    seen_sequences: set[int] = set()

    for candidate, entries in zip(candidates, entry_lists):
        for entry in entries:
            if entry.sequence in seen_sequences:
                continue
            if not is_compatible(candidate.grammar_chain, entry):
                continue

            seen_sequences.add(entry.sequence)
            results.append(_to_result(word, candidate, entry))

    return results


def _normalize_hint(reading_hint: str | None) -> str | None:
    return katakana_to_hiragana(reading_hint) if reading_hint else None


def _misses_hint(result: LookupResult, hint: str | None) -> bool:
    """Sort key: False for results whose reading matches the hint."""
    if hint is None:
        return False
    return katakana_to_hiragana(result.reading) != hint


async def lookup_word(
    index: DictionaryIndex,
    word: str,
    reading_hint: str | None = None,
) -> list[LookupResult]:
    """
    Look up a word, trying every deinflected form.

    Args:
        index: Dictionary to query.
        word: Word as written (surface or base form).
        reading_hint: Reading from a tokenizer, in hiragana or katakana.

    Returns:
        Results with a matching reading first, then by descending score.
    """
    hint = _normalize_hint(reading_hint)
    results = await _resolve(index, word)
    results.sort(key=lambda r: (_misses_hint(r, hint), -r.score))

    logger.debug("lookup_word %r (hint=%r) -> %d results", word, hint, len(results))
    return results


async def lookup_word_best(
    index: DictionaryIndex,
    word: str,
    reading_hint: str | None = None,
) -> LookupResult | None:
    """Get the single best result for a word, if any."""
    results = await lookup_word(index, word, reading_hint)
    return results[0] if results else None


async def lookup_word_with_substrings(
    index: DictionaryIndex,
    text: str,
    start_index: int,
    max_length: int = DEFAULT_MAX_SUBSTRING_LENGTH,
    reading_hint: str | None = None,
) -> list[LookupResult]:
    """
    Find dictionary words starting at ``text[start_index]``, longest first.

    Every prefix of up to ``max_length`` characters is looked up. An entry
    matched by several prefixes is only reported for the longest one.

    Returns:
        Results tagged with ``match_length``, ordered by match length, then
        reading-hint match, then score.
    """
    if start_index < 0 or start_index >= len(text) or max_length <= 0:
        return []

    end = min(start_index + max_length, len(text))
    substrings = [
        text[start_index:start_index + length]
        for length in range(end - start_index, 0, -1)
    ]
    # A sentence break can never be inside a single word
    substrings = [s for s in substrings if not contains_sentence_terminator(s)]

    passes = await asyncio.gather(*(_resolve(index, s) for s in substrings))

    hint = _normalize_hint(reading_hint)
    results: list[LookupResult] = []
    seen_sequences: set[int] = set()

    for substring, pass_results in zip(substrings, passes):
        for result in pass_results:
            if result.sequence in seen_sequences:
                continue
            seen_sequences.add(result.sequence)
            results.append(replace(result, match_length=len(substring)))

    results.sort(key=lambda r: (-r.match_length, _misses_hint(r, hint), -r.score))

    logger.debug(
        "lookup_word_with_substrings %r@%d -> %d results", text, start_index, len(results)
    )
    return results


class Lookup:
    """Lookup operations bound to one dictionary index."""

    def __init__(self, index: DictionaryIndex) -> None:
        self.index = index

    @staticmethod
    def deinflect(word: str) -> list[DeinflectionCandidate]:
        return deinflect(word)

    async def lookup_word(self, word: str, reading_hint: str | None = None) -> list[LookupResult]:
        return await lookup_word(self.index, word, reading_hint)

    async def lookup_word_best(self, word: str, reading_hint: str | None = None) -> LookupResult | None:
        return await lookup_word_best(self.index, word, reading_hint)

    async def lookup_word_with_substrings(
        self,
        text: str,
        start_index: int,
        max_length: int = DEFAULT_MAX_SUBSTRING_LENGTH,
        reading_hint: str | None = None,
    ) -> list[LookupResult]:
        return await lookup_word_with_substrings(
            self.index, text, start_index, max_length, reading_hint
        )

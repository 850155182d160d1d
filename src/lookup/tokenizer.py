"""Tokenizer adapter: the word under a click position, with its reading.

The lookup engine never segments text itself. A tokenizer supplies the
surface form, base form and reading at a position; the reading is then used
as a hint to pick the right homograph.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol, Self

import jaconv
from sudachipy import Dictionary, SplitMode

from lookup.config import SUDACHI_DICT
from lookup.dictionary import DictionaryIndex
from lookup.kana import get_sentence_with_offset, is_japanese_word
from lookup.resolver import LookupResult, lookup_word


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Token:
    """A token as reported by the tokenizer."""

    surface: str
    base_form: str
    reading: str
    start: int = 0
    end: int = 0


class Tokenizer(Protocol):
    def token_at(self, sentence: str, offset: int) -> Token | None:
        """Return the token covering ``sentence[offset]``."""
        ...


class SudachiTokenizer:
    """Tokenizer backed by SudachiPy (split mode C)."""

    def __init__(self, dict_type: str = SUDACHI_DICT) -> None:
        self._tokenizer = Dictionary(dict=dict_type).create()

    @classmethod
    @lru_cache(maxsize=1)
    def get_instance(cls) -> Self:
        """Get or create a singleton instance."""
        return cls()

    def tokenize(self, text: str) -> list[Token]:
        return [
            Token(
                surface=m.surface(),
                base_form=m.dictionary_form(),
                reading=jaconv.kata2hira(m.reading_form()),
                start=m.begin(),
                end=m.end(),
            )
            for m in self._tokenizer.tokenize(text, SplitMode.C)
        ]

    def token_at(self, sentence: str, offset: int) -> Token | None:
        for token in self.tokenize(sentence):
            if token.start <= offset < token.end:
                return token
        return None


async def lookup_at_position(
    index: DictionaryIndex,
    tokenizer: Tokenizer,
    text: str,
    offset: int,
) -> tuple[Token, list[LookupResult]] | None:
    """
    Look up the word under ``text[offset]``.

    Finds the sentence around the offset, asks the tokenizer for the token
    there, and looks up its base form with the token's reading as hint.

    Returns:
        (token, results), or None if there is no Japanese word at the offset.
    """
    found = get_sentence_with_offset(text, offset)
    if found is None:
        return None
    sentence, sentence_offset = found

    token = tokenizer.token_at(sentence, sentence_offset)
    if token is None or not is_japanese_word(token.surface):
        return None

    # Sudachi reports "*" for unknown base forms in some dictionaries
    lookup_form = token.base_form if token.base_form and token.base_form != "*" else token.surface
    logger.debug("Token at %d: %s (base %s, reading %s)", offset, token.surface, lookup_form, token.reading)

    results = await lookup_word(index, lookup_form, token.reading or None)
    return token, results

"""Kana conversion and sentence helpers."""

import re

import jaconv

# Japanese sentence-ending punctuation and line breaks
SENTENCE_TERMINATORS = frozenset("。！？‥…⋯\n\r")

_SENTENCE_ENDERS = re.compile("[。！？\n\r‥…⋯]+")
_JAPANESE = re.compile("[\u3040-\u309f\u30a0-\u30ff\u4e00-\u9faf\u3400-\u4dbf]")
_PUNCTUATION_ONLY = re.compile(r"^[。、！？「」『』（）【】\s]+$")


def katakana_to_hiragana(text: str) -> str:
    """Convert katakana to hiragana, leaving everything else untouched."""
    return jaconv.kata2hira(text)


def hiragana_to_katakana(text: str) -> str:
    return jaconv.hira2kata(text)


def contains_japanese(text: str) -> bool:
    """Check for at least one hiragana, katakana or kanji character."""
    return bool(_JAPANESE.search(text))


def is_japanese_word(text: str) -> bool:
    """Check that ``text`` is Japanese and not just punctuation."""
    if not text or not contains_japanese(text):
        return False
    return not _PUNCTUATION_ONLY.match(text)


def contains_sentence_terminator(text: str) -> bool:
    return any(char in SENTENCE_TERMINATORS for char in text)


def get_sentence_with_offset(text: str, index: int) -> tuple[str, int] | None:
    """
    Find the sentence containing ``text[index]``.

    Returns:
        Tuple of (sentence, offset of the character within the sentence),
        or None if ``index`` is out of range.
    """
    if index < 0 or index >= len(text):
        return None

    boundaries = [0]
    boundaries.extend(match.end() for match in _SENTENCE_ENDERS.finditer(text))
    boundaries.append(len(text))

    for start, end in zip(boundaries, boundaries[1:]):
        if start <= index < end:
            raw = text[start:end]
            leading = len(raw) - len(raw.lstrip())
            return raw.strip(), max(0, index - start - leading)

    return None

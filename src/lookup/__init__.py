"""Japanese word lookup: deinflection and dictionary resolution."""

from .deinflector import DeinflectionCandidate, deinflect, most_likely_dictionary_form
from .dictionary import (
    DictionaryDefinition,
    DictionaryEntry,
    DictionaryError,
    DictionaryIndex,
    DictionaryNotLoadedError,
    InMemoryDictionaryIndex,
)
from .grammar import is_compatible
from .resolver import (
    Lookup,
    LookupResult,
    lookup_word,
    lookup_word_best,
    lookup_word_with_substrings,
)
from .rules import DEINFLECTION_RULES, DeinflectionRule, GrammarClass
from .termbank import TermBankError, load_dictionary, parse_term_bank_entry

__all__ = [
    # Rule table
    "DEINFLECTION_RULES",
    "DeinflectionRule",
    "GrammarClass",
    # Deinflection
    "DeinflectionCandidate",
    "deinflect",
    "most_likely_dictionary_form",
    # Dictionary
    "DictionaryDefinition",
    "DictionaryEntry",
    "DictionaryError",
    "DictionaryIndex",
    "DictionaryNotLoadedError",
    "InMemoryDictionaryIndex",
    "TermBankError",
    "load_dictionary",
    "parse_term_bank_entry",
    # Lookup
    "is_compatible",
    "Lookup",
    "LookupResult",
    "lookup_word",
    "lookup_word_best",
    "lookup_word_with_substrings",
]

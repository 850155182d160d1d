"""Grammar compatibility between deinflection paths and dictionary entries."""

from lookup.dictionary import DictionaryEntry
from lookup.rules import GrammarClass

# JMdict splits godan verbs by ending: v5u, v5k, v5r-i, v5k-s, ...
GODAN_TAG_PREFIX = "v5"


def _class_matches(grammar_class: GrammarClass, tokens: list[str]) -> bool:
    if grammar_class in tokens:
        return True

    match grammar_class:
        case GrammarClass.GODAN:
            return any(token.startswith(GODAN_TAG_PREFIX) for token in tokens)
        case _:
            return False


def is_compatible(grammar_chain: tuple[GrammarClass, ...], entry: DictionaryEntry) -> bool:
    """Check whether a derivation could have produced ``entry``.

    A chain is accepted when any class along it agrees with the entry's rule
    or tag tokens. Untransformed words and entries without any grammar
    metadata are always accepted.
    """
    if not grammar_chain:
        return True

    tokens = entry.rule_tokens + entry.tag_tokens
    if not tokens:
        return True

    return any(_class_matches(grammar_class, tokens) for grammar_class in grammar_chain)

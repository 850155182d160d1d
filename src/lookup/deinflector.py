"""Japanese verb/adjective deinflection.

Walks conjugated forms back to candidate dictionary forms, e.g.
- 食べない -> 食べる (negative)
- 読んでいた -> 読んでいる -> 読む (past, progressive)
- 言われちゃった -> 言われる -> 言う (shimau contraction (past), passive)

The search is breadth-first over DEINFLECTION_RULES. Every term string is
produced at most once per call: when two rule paths reach the same term,
the one discovered first is kept.
"""

from collections import deque
from dataclasses import dataclass

from lookup.rules import GrammarClass, rules_for_suffix


@dataclass(frozen=True, slots=True)
class DeinflectionCandidate:
    """A possible dictionary form and the path that produced it."""

    term: str
    grammar_chain: tuple[GrammarClass, ...] = ()
    reason_chain: tuple[str, ...] = ()

    @property
    def is_original(self) -> bool:
        return not self.reason_chain


def deinflect(word: str) -> list[DeinflectionCandidate]:
    """Find every term reachable from ``word`` by backward suffix rewrites.

    Args:
        word: Surface form as written, possibly conjugated.

    Returns:
        Candidates in discovery order. The first is always ``word`` itself
        with empty chains.
    """
    origin = DeinflectionCandidate(word)
    results = [origin]
    seen = {word}
    queue = deque([origin])

    while queue:
        current = queue.popleft()

        for rule in rules_for_suffix(current.term):
            stem = current.term[: len(current.term) - len(rule.inflected_suffix)]
            new_term = stem + rule.base_suffix
            if not new_term or new_term in seen:
                continue

            seen.add(new_term)
            candidate = DeinflectionCandidate(
                term=new_term,
                grammar_chain=current.grammar_chain + rule.output_classes,
                reason_chain=current.reason_chain + (rule.reason,),
            )
            results.append(candidate)
            queue.append(candidate)

    return results


def most_likely_dictionary_form(candidates: list[DeinflectionCandidate]) -> str:
    """Pick the candidate reached with the fewest transformations."""
    if not candidates:
        return ""
    return min(candidates, key=lambda c: len(c.reason_chain)).term
